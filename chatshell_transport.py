import requests

import chatshell_config
from chatshell_errors import TransportError


class GenerateStream:
    """One open streaming response from /api/generate.

    Closing it drops the connection, so the caller can stop reading as soon as
    the final record arrives instead of waiting for the server to end the body.
    """

    def __init__(self, response):
        self._response = response

    def lines(self):
        try:
            # iter_lines buffers partial chunks until a full line is available
            for line in self._response.iter_lines():
                yield line
        except requests.RequestException as e:
            raise TransportError(f"Error reading the response stream: {e}") from e

    def close(self):
        self._response.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _error_detail(response):
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("error"):
        return f" ({body['error']})"
    return ""


def open_generate(payload, base_url=None, timeout=None):
    base_url = base_url or chatshell_config.OLLAMA_URL
    if timeout is None:
        timeout = (chatshell_config.CONNECT_TIMEOUT, chatshell_config.READ_TIMEOUT)
    url = chatshell_config.endpoint(base_url, "api/generate")

    try:
        response = requests.post(url, json=payload, stream=True, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"Error in the POST request to {url}: {e}") from e

    if not response.ok:
        detail = _error_detail(response)
        response.close()
        raise TransportError(
            f"Unexpected server response: {response.status_code} {response.reason}{detail}",
            status=response.status_code,
        )
    return GenerateStream(response)
