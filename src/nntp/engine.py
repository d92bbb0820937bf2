"""
Command/response cycle shared by every NNTP operation.
"""

import logging
from typing import Optional

from . import status
from .protocol import Response, parse_status_code, unescape_dots
from .session import SessionRecorder
from .transport import Transport


class CommandEngine:
    """
    Sends a command, reads the status line and, when asked, the body that follows.
    """

    def __init__(self, transport: Transport, logger: Optional[logging.Logger] = None,
                 session_recorder: Optional[SessionRecorder] = None,
                 unescape: bool = False):
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.session_recorder = session_recorder
        self.unescape = unescape
        self.last_response: Optional[Response] = None

    def execute(self, command: str, enforce_status: bool = True) -> int:
        """
        Send a command and read its status line.

        Args:
            command: Command line without terminator
            enforce_status: Raise the classified error for failure codes

        Returns:
            int: The status code (0 when the line carries none)

        Raises:
            ProtocolError: If enforcing and the server reports an error code
            MalformedResponseError: If enforcing and no status code was parsed
        """
        self.transport.send_line(command)
        self.logger.info(f"Sent {command!r}")
        if self.session_recorder:
            self.session_recorder.record_request(command)

        line = self.transport.read_line()
        code = parse_status_code(line)
        self.logger.debug(f"Received {line!r}")
        self.last_response = Response(code, line)
        if self.session_recorder:
            self.session_recorder.record_response(self.last_response)

        if enforce_status and status.classify(code) is not None:
            error = status.error_for(code, line)
            self.logger.error(f"{command!r} failed: {error}")
            raise error
        return code

    def execute_and_fetch_body(self, command: str) -> str:
        """Execute a command that must succeed and return its multi-line body."""
        self.execute(command)
        payload = self.transport.read_multiline_body()
        if self.unescape:
            payload = unescape_dots(payload)
        self.last_response.payload = payload
        self.logger.debug(f"Read {len(payload)} characters of body")
        if self.session_recorder:
            self.session_recorder.record_body(payload)
        return payload
