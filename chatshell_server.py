import signal
import subprocess
import sys

from chatshell_errors import ChatShellError
from chatshell_log import log_event, log_print
from chatshell_ready import is_server_running


class OllamaServer:
    """Owns the `ollama serve` child process, if this program started one."""

    def __init__(self, base_url=None, command=("ollama", "serve")):
        self.base_url = base_url
        self.command = list(command)
        self.process = None

    @property
    def pid(self):
        return self.process.pid if self.process else None

    def start(self):
        """Spawn the server unless one already answers. Returns True if spawned."""
        if is_server_running(self.base_url):
            log_event("ollama already running, attaching to it")
            return False
        try:
            self.process = subprocess.Popen(
                self.command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise ChatShellError(f"Error starting '{' '.join(self.command)}': {e}. Is 'ollama' in your PATH?") from e
        log_event(f"started {' '.join(self.command)} pid={self.process.pid}")
        return True

    def stop(self):
        if self.process is None:
            return False
        if self.process.poll() is None:
            self.process.kill()
            self.process.wait()
        log_event(f"stopped ollama pid={self.process.pid}")
        self.process = None
        return True

    def install_signal_handlers(self, console=None):
        def handle(signum, frame):
            message = "Interrupt received. Stopping Ollama..."
            if console is not None:
                log_event(message)
                console.plain()
                console.error(message)
            else:
                log_print(message)
            self.stop()
            sys.exit(0)

        signal.signal(signal.SIGINT, handle)
        signal.signal(signal.SIGTERM, handle)
