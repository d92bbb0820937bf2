"""
NNTP client package.
"""

from .client import NNTPClient
from .exceptions import (
    NNTPError, ConnectionError, ServerDisconnectionError, TimeoutError,
    MalformedResponseError, ProtocolError
)
from .protocol import ArticleAddress, AddressingMode, ContentMode, GroupSummary, Response
from .status import ErrorKind, classify

__all__ = [
    "NNTPClient",
    "NNTPError", "ConnectionError", "ServerDisconnectionError", "TimeoutError",
    "MalformedResponseError", "ProtocolError",
    "ArticleAddress", "AddressingMode", "ContentMode", "GroupSummary", "Response",
    "ErrorKind", "classify",
]
