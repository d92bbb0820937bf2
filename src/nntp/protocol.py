"""
NNTP wire vocabulary.

This module holds the command verbs, content and addressing modes, and the
parsers that reshape status lines and multi-line payloads into Python values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


LINE_TERMINATOR = b"\r\n"
BODY_TERMINATOR = b"\r\n.\r\n"


# Protocol Commands
class Commands:
    LIST_ACTIVE = "list active"
    LISTGROUP = "listgroup"
    GROUP = "group"
    ARTICLE = "article"
    BODY = "body"
    HEAD = "head"
    STAT = "stat"
    NEXT = "next"
    QUIT = "quit"


class ContentMode(Enum):
    """Which part of an article a fetch returns."""
    FULL = "full"
    BODY = "body"
    HEADER = "header"

    @property
    def command(self) -> str:
        return _FETCH_COMMANDS[self]


_FETCH_COMMANDS = {
    ContentMode.FULL: Commands.ARTICLE,
    ContentMode.BODY: Commands.BODY,
    ContentMode.HEADER: Commands.HEAD,
}


class AddressingMode(Enum):
    CURRENT_SELECTION = "current"
    BY_MESSAGE_ID = "message_id"
    BY_GROUP_AND_ARTICLE_ID = "group_article_id"


@dataclass(frozen=True)
class ArticleAddress:
    """
    Where an article lives.

    A message id is global and needs no group; an article id is only
    meaningful inside its group, which is selected before the fetch.
    """
    mode: AddressingMode
    identifier: Optional[str] = None
    group: Optional[str] = None

    @classmethod
    def current(cls) -> "ArticleAddress":
        return cls(AddressingMode.CURRENT_SELECTION)

    @classmethod
    def by_message_id(cls, message_id: str) -> "ArticleAddress":
        return cls(AddressingMode.BY_MESSAGE_ID, identifier=message_id)

    @classmethod
    def in_group(cls, group: str, article_id: str) -> "ArticleAddress":
        return cls(AddressingMode.BY_GROUP_AND_ARTICLE_ID, identifier=article_id, group=group)


@dataclass
class Response:
    """Result of one command/response exchange."""
    code: int
    line: str
    payload: Optional[str] = None


@dataclass(frozen=True)
class GroupSummary:
    name: str
    count: int = 0
    first: int = 0
    last: int = 0


def parse_status_code(line: str) -> int:
    """
    Parse the leading three digits of a status line.

    Returns:
        int: The status code, or 0 when the line carries none
    """
    token = line[:3]
    if len(token) != 3 or not token.isdigit():
        return 0
    return int(token)


def parse_int(token: str, default: int = 0) -> int:
    try:
        return int(token)
    except ValueError:
        return default


def fetch_command(content: ContentMode, identifier: Optional[str] = None) -> str:
    """Build an article/body/head command, optionally addressed."""
    if identifier is None:
        return content.command
    return f"{content.command} {identifier}"


def trim_listing(payload: str) -> List[str]:
    """
    Split a listing payload into lines.

    The first line and the final two lines are listing artifacts and are
    dropped. The terminator of the last line does not start another line.
    """
    if payload.endswith("\r\n"):
        payload = payload[:-2]
    lines = [line.rstrip("\r") for line in payload.split("\n")]
    return lines[1:-2]


def parse_group_list(payload: str) -> Dict[str, int]:
    """
    Parse a ``list active`` payload into group name -> article count.

    Lines with fewer than two tokens are skipped; a non-numeric count becomes 0.
    Later duplicates overwrite earlier ones.
    """
    groups: Dict[str, int] = {}
    for line in trim_listing(payload):
        tokens = line.split()
        if len(tokens) > 1:
            groups[tokens[0]] = parse_int(tokens[1])
    return groups


def parse_group_summary(line: str, group: str) -> GroupSummary:
    """Parse a ``211 count first last name`` line."""
    tokens = line.split()
    numbers = [parse_int(token) for token in tokens[1:4]]
    numbers += [0] * (3 - len(numbers))
    name = tokens[4] if len(tokens) > 4 else group
    return GroupSummary(name, *numbers)


def unescape_dots(payload: str) -> str:
    """Remove the escaping dot from lines that begin with two dots."""
    lines = payload.split("\r\n")
    return "\r\n".join(line[1:] if line.startswith("..") else line for line in lines)
