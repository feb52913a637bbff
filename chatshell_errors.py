class ChatShellError(Exception):
    pass


class TransportError(ChatShellError):
    """The generate request could not be sent or the server refused it."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class ProtocolError(ChatShellError):
    """The response stream did not follow the line-per-record format."""


class TurnFailed(ChatShellError):
    """A turn was aborted; the session context has already been cleared."""

    def __init__(self, cause):
        super().__init__(str(cause))
        self.cause = cause


class ServerNotReady(ChatShellError):
    pass


class CatalogError(ChatShellError):
    pass
