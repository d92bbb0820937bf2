"""
Status code table for the NNTP client.

Maps the three-digit codes a news server returns onto error kinds, and builds
the exception raised for each of them.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from .exceptions import MalformedResponseError, NNTPError, ProtocolError


class ErrorKind(Enum):
    READ_FAILURE = "read_failure"
    NO_SUCH_GROUP = "no_such_group"
    NO_GROUP_SELECTED = "no_group_selected"
    NO_ARTICLE_SELECTED = "no_article_selected"
    NO_NEXT_ARTICLE = "no_next_article"
    NO_PREVIOUS_ARTICLE = "no_previous_article"
    NO_SUCH_ARTICLE_NUMBER = "no_such_article_number"
    NO_SUCH_ARTICLE = "no_such_article"
    ARTICLE_NOT_WANTED = "article_not_wanted"
    TRANSFER_FAILED = "transfer_failed"
    ARTICLE_REJECTED = "article_rejected"
    POSTING_NOT_ALLOWED = "posting_not_allowed"
    POSTING_FAILED = "posting_failed"
    COMMAND_NOT_RECOGNIZED = "command_not_recognized"
    COMMAND_SYNTAX_ERROR = "command_syntax_error"
    PERMISSION_DENIED = "permission_denied"
    PROGRAM_FAULT = "program_fault"
    PROTOCOL_FAULT = "protocol_fault"


# Status codes
GROUP_SELECTED = 211
ARTICLE_EXISTS = 223
NO_NEXT_ARTICLE = 421
NO_SUCH_ARTICLE_NUMBER = 423
NO_SUCH_ARTICLE = 430


ERROR_CODES: Dict[int, Tuple[ErrorKind, str]] = {
    0: (ErrorKind.READ_FAILURE, "error while reading socket data"),
    411: (ErrorKind.NO_SUCH_GROUP, "no such group"),
    412: (ErrorKind.NO_GROUP_SELECTED, "no newsgroup has been selected"),
    420: (ErrorKind.NO_ARTICLE_SELECTED, "no article has been selected"),
    421: (ErrorKind.NO_NEXT_ARTICLE, "no next article found"),
    422: (ErrorKind.NO_PREVIOUS_ARTICLE, "no previous article found"),
    423: (ErrorKind.NO_SUCH_ARTICLE_NUMBER, "no such article number in this group"),
    430: (ErrorKind.NO_SUCH_ARTICLE, "no such article found"),
    435: (ErrorKind.ARTICLE_NOT_WANTED, "article not wanted - do not send"),
    436: (ErrorKind.TRANSFER_FAILED, "transfer failed - try again later"),
    437: (ErrorKind.ARTICLE_REJECTED, "article rejected - do not try again"),
    440: (ErrorKind.POSTING_NOT_ALLOWED, "posting not allowed"),
    441: (ErrorKind.POSTING_FAILED, "posting failed"),
    500: (ErrorKind.COMMAND_NOT_RECOGNIZED, "command not recognized"),
    501: (ErrorKind.COMMAND_SYNTAX_ERROR, "command syntax error"),
    502: (ErrorKind.PERMISSION_DENIED, "access restriction or permission denied"),
    503: (ErrorKind.PROGRAM_FAULT, "program fault"),
}


def is_success(code: int) -> bool:
    """Return True for informational and success codes (1xx-3xx)."""
    return 100 <= code < 400


def classify(code: int) -> Optional[ErrorKind]:
    """
    Classify a status code.

    Args:
        code: Status code parsed from a response line (0 if unparseable)

    Returns:
        The error kind for the code, or None when the code signals success
    """
    if code in ERROR_CODES:
        return ERROR_CODES[code][0]
    if is_success(code):
        return None
    return ErrorKind.PROTOCOL_FAULT


def describe(code: int) -> str:
    """Get a human-readable message for a status code."""
    if code in ERROR_CODES:
        return ERROR_CODES[code][1]
    if is_success(code):
        return "unexpected status"
    return "protocol fault"


def error_for(code: int, line: str = "") -> NNTPError:
    """
    Build the exception that reports a status code as a failure.

    Codes that classify as success still produce a generic protocol fault,
    for callers that only accept a narrower set of codes.
    """
    kind = classify(code) or ErrorKind.PROTOCOL_FAULT
    if kind is ErrorKind.READ_FAILURE:
        return MalformedResponseError(describe(code), line)
    return ProtocolError(code, kind, describe(code))
