"""
NNTP news client.

This module implements the public operations of the news reader: group
listing and selection, article retrieval in each addressing mode, existence
probes and sequential navigation.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Union

from . import status
from .engine import CommandEngine
from .exceptions import NNTPError
from .protocol import (
    AddressingMode, ArticleAddress, Commands, ContentMode, GroupSummary,
    fetch_command, parse_group_list, parse_group_summary, trim_listing
)
from .session import SessionRecorder
from .transport import Endpoint, Transport


class NNTPClient:
    """
    Read-only NNTP client bound to a single server session.

    The client can be used as a context manager; the session is closed, with
    ``quit`` sent first, on every exit path.
    """

    def __init__(self, host: str, port: Union[int, str] = "nntp", timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None, record_session: bool = False,
                 unescape_dots: bool = False):
        self.endpoint = Endpoint(host, port)
        self.logger = logger or logging.getLogger(__name__)
        self.content = ContentMode.BODY
        self.session_recorder = SessionRecorder(server=str(self.endpoint)) if record_session else None
        self.transport = Transport(self.endpoint, timeout=timeout, logger=self.logger)
        self.engine = CommandEngine(
            self.transport, logger=self.logger,
            session_recorder=self.session_recorder, unescape=unescape_dots
        )

    @property
    def server(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> Union[int, str]:
        return self.endpoint.service

    @property
    def welcome(self) -> Optional[str]:
        return self.transport.welcome

    def connect(self) -> str:
        """
        Open the session and consume the server greeting.

        Raises:
            ConnectionError: If no candidate address accepts the connection
        """
        try:
            welcome = self.transport.connect()
        except NNTPError as e:
            if self.session_recorder:
                self.session_recorder.record_event("error", str(e), {"error_type": "connection_failed"})
            raise
        if self.session_recorder:
            self.session_recorder.record_event(
                "connection", f"Connected to {self.endpoint}", {"welcome": welcome}
            )
        return welcome

    def close(self) -> None:
        """Send ``quit`` and release the socket, even if sending fails."""
        was_connected = self.transport.connected
        self.transport.close(Commands.QUIT)
        if self.session_recorder and was_connected:
            self.session_recorder.record_event("disconnection", "Client disconnected")

    def __enter__(self) -> "NNTPClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def list_groups(self) -> Dict[str, int]:
        """
        Fetch the active group list.

        Returns:
            Dict mapping group name to article count
        """
        payload = self.engine.execute_and_fetch_body(Commands.LIST_ACTIVE)
        groups = parse_group_list(payload)
        self.logger.info(f"Listed {len(groups)} groups")
        return groups

    def list_article_ids(self, group: str) -> List[str]:
        """
        List the article ids of a group, in server order.

        ``listgroup`` also selects the group.
        """
        payload = self.engine.execute_and_fetch_body(f"{Commands.LISTGROUP} {group}")
        return trim_listing(payload)

    def select_group(self, group: str) -> GroupSummary:
        """
        Select a group as the current group.

        Raises:
            ProtocolError: With code 411 if the group does not exist
        """
        self.engine.execute(f"{Commands.GROUP} {group}")
        summary = parse_group_summary(self.engine.last_response.line, group)
        self.logger.info(f"Selected {summary.name} ({summary.count} articles)")
        return summary

    def get_article(self, address: Optional[ArticleAddress] = None,
                    content: Optional[ContentMode] = None) -> str:
        """
        Fetch one article.

        Args:
            address: Article to fetch; the currently selected article if omitted
            content: Part of the article to return; defaults to ``self.content``

        Returns:
            str: The raw article text
        """
        address = address or ArticleAddress.current()
        content = content or self.content

        if address.mode is AddressingMode.CURRENT_SELECTION:
            return self.engine.execute_and_fetch_body(fetch_command(content))
        if address.mode is AddressingMode.BY_GROUP_AND_ARTICLE_ID:
            self.select_group(address.group)
        return self.engine.execute_and_fetch_body(fetch_command(content, address.identifier))

    def get_articles(self, addresses: Iterable[ArticleAddress],
                     content: Optional[ContentMode] = None) -> List[str]:
        """Fetch several articles in order; the first failure propagates."""
        return [self.get_article(address, content) for address in addresses]

    def get_article_by_message_id(self, message_id: str, content: Optional[ContentMode] = None) -> str:
        return self.get_article(ArticleAddress.by_message_id(message_id), content)

    def get_article_in_group(self, group: str, article_id: str, content: Optional[ContentMode] = None) -> str:
        return self.get_article(ArticleAddress.in_group(group, article_id), content)

    def get_articles_by_message_id(self, message_ids: Iterable[str],
                                   content: Optional[ContentMode] = None) -> List[str]:
        return self.get_articles(
            [ArticleAddress.by_message_id(message_id) for message_id in message_ids], content
        )

    def get_articles_in_group(self, group: str, article_ids: Iterable[str],
                              content: Optional[ContentMode] = None) -> List[str]:
        """Select ``group`` once, then fetch each article id in order."""
        content = content or self.content
        self.select_group(group)
        return [
            self.engine.execute_and_fetch_body(fetch_command(content, article_id))
            for article_id in article_ids
        ]

    def exists_article(self, message_id: str) -> bool:
        """Probe for an article by message id (223 exists, 430 absent)."""
        return self._probe(message_id, status.NO_SUCH_ARTICLE)

    def exists_article_in_group(self, group: str, article_id: str) -> bool:
        """Probe for an article number in a group (223 exists, 423 absent)."""
        self.select_group(group)
        return self._probe(article_id, status.NO_SUCH_ARTICLE_NUMBER)

    def _probe(self, identifier: str, absent_code: int) -> bool:
        code = self.engine.execute(f"{Commands.STAT} {identifier}", enforce_status=False)
        if code == status.ARTICLE_EXISTS:
            return True
        if code == absent_code:
            return False
        raise status.error_for(code, self.engine.last_response.line)

    def advance_to_next_article(self) -> bool:
        """
        Move the current article pointer forward.

        Returns:
            bool: False at the end of the group (421), True otherwise
        """
        code = self.engine.execute(Commands.NEXT, enforce_status=False)
        if code == status.NO_NEXT_ARTICLE:
            return False
        if status.classify(code) is not None:
            raise status.error_for(code, self.engine.last_response.line)
        return True

    def iter_articles(self, group: str, content: Optional[ContentMode] = None) -> Iterator[str]:
        """Yield every article of a group, following ``next`` until the end."""
        summary = self.select_group(group)
        if summary.count == 0:
            return
        yield self.get_article(content=content)
        while self.advance_to_next_article():
            yield self.get_article(content=content)
