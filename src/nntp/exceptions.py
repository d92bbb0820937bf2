"""
Custom exceptions for the NNTP news client.
"""


class NNTPError(Exception):
    """Base exception for all NNTP client errors."""
    pass


class ConnectionError(NNTPError):
    """Raised when connection issues occur."""
    pass


class ServerDisconnectionError(ConnectionError):
    """Raised when the server closes the connection unexpectedly."""
    pass


class TimeoutError(ConnectionError):
    """Raised when connection or read times out."""
    pass


class MalformedResponseError(ConnectionError):
    """Raised when a status line carries no parseable status code."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.code = 0
        self.line = line


class ProtocolError(NNTPError):
    """Raised when the server answers with an error status code."""

    def __init__(self, code: int, kind, message: str):
        super().__init__(f"{code} {message}")
        self.code = code
        self.kind = kind
        self.message = message
