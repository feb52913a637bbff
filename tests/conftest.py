import socket
import threading

import pytest
from werkzeug.serving import make_server

import chatshell_log
from fake_ollama import create_app


class FakeOllama:
    def __init__(self, app, url):
        self.app = app
        self.url = url

    def script(self, *steps):
        self.app.config["SCRIPT"].extend(steps)

    @property
    def requests(self):
        return self.app.config["REQUESTS"]


@pytest.fixture(autouse=True)
def history_log(tmp_path, monkeypatch):
    path = tmp_path / "history.log"
    monkeypatch.setattr(chatshell_log, "LOG_FILE", str(path))
    return path


@pytest.fixture
def fake_ollama():
    app = create_app()
    server = make_server("127.0.0.1", 0, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield FakeOllama(app, f"http://127.0.0.1:{server.server_port}/")
    finally:
        server.shutdown()
        thread.join(timeout=5)


@pytest.fixture
def dead_url():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/"
