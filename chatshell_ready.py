import time

import requests

import chatshell_config

PROBE_TIMEOUT = 2


def is_server_running(base_url=None, timeout=PROBE_TIMEOUT):
    """Any HTTP response, whatever its status, means the server accepts connections."""
    try:
        requests.get(base_url or chatshell_config.OLLAMA_URL, timeout=timeout)
        return True
    except requests.RequestException:
        return False


def wait_until_ready(base_url=None, timeout=None, interval=None, on_wait=None):
    """Poll the server at a fixed interval until it answers or ``timeout`` elapses."""
    if timeout is None:
        timeout = chatshell_config.READY_TIMEOUT
    if interval is None:
        interval = chatshell_config.POLL_INTERVAL

    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if is_server_running(base_url, timeout=min(PROBE_TIMEOUT, max(remaining, 0.1))):
            return True
        if time.monotonic() >= deadline:
            return False
        if on_wait is not None:
            on_wait()
        time.sleep(min(interval, max(deadline - time.monotonic(), 0)))
