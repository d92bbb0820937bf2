"""
Line-oriented transport for the NNTP client.

A Transport owns exactly one TCP connection: it resolves the server, tries
each candidate address in turn, consumes the greeting, and reads and writes
CRLF-terminated lines and dot-terminated bodies.
"""

import logging
import socket
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import ConnectionError, ServerDisconnectionError, TimeoutError
from .protocol import BODY_TERMINATOR, LINE_TERMINATOR


ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"
RECV_SIZE = 4096
QUIT_TIMEOUT = 5.0


@dataclass(frozen=True)
class Endpoint:
    """Server address: host plus port number or service name."""
    host: str
    service: Union[int, str] = "nntp"

    def __str__(self) -> str:
        return f"{self.host}:{self.service}"


class Transport:
    """
    Raw line protocol over a single TCP session.
    """

    def __init__(self, endpoint: Endpoint, timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.socket: Optional[socket.socket] = None
        self.welcome: Optional[str] = None
        self.closed = False
        self._buffer = b""

    @property
    def connected(self) -> bool:
        return self.socket is not None

    def connect(self) -> str:
        """
        Connect to the first reachable address of the endpoint and read the greeting.

        Returns:
            str: The server greeting line

        Raises:
            ConnectionError: If resolution fails or every candidate refuses
        """
        if self.closed:
            raise ConnectionError("Session already closed")
        if self.socket:
            raise ConnectionError("Already connected")

        self.logger.info(f"Connecting to {self.endpoint}")
        try:
            candidates = socket.getaddrinfo(
                self.endpoint.host, self.endpoint.service, 0, socket.SOCK_STREAM
            )
        except socket.gaierror as e:
            error_msg = f"Cannot resolve {self.endpoint}: {e}"
            self.logger.error(error_msg)
            raise ConnectionError(error_msg)

        last_error: Optional[OSError] = None
        for family, socktype, proto, _, address in candidates:
            sock = None
            try:
                sock = socket.socket(family, socktype, proto)
                sock.settimeout(self.timeout)
                sock.connect(address)
            except OSError as e:
                self.logger.debug(f"Connect to {address} failed: {e}")
                if sock:
                    sock.close()
                last_error = e
                continue
            self.socket = sock
            break

        if not self.socket:
            error_msg = f"Cannot connect to news server {self.endpoint}: {last_error}"
            self.logger.error(error_msg)
            raise ConnectionError(error_msg)

        try:
            self.welcome = self.read_line()
        except ConnectionError:
            self._release()
            raise
        self.logger.info(f"Connection established: {self.welcome}")
        return self.welcome

    def send_line(self, text: str) -> None:
        """
        Send one command line, appending CRLF.

        Raises:
            ConnectionError: If sending fails
        """
        sock = self._require_socket()
        try:
            sock.sendall(text.encode(ENCODING, ENCODING_ERRORS) + LINE_TERMINATOR)
        except socket.timeout:
            raise self._fail(TimeoutError, "Timeout while sending command")
        except OSError as e:
            raise self._fail(ConnectionError, f"Failed to send command: {e}")

    def read_line(self) -> str:
        """Read the next line, without its terminator."""
        data = self._read_until(LINE_TERMINATOR)
        return data[:-len(LINE_TERMINATOR)].decode(ENCODING, ENCODING_ERRORS)

    def read_multiline_body(self) -> str:
        """
        Read a dot-terminated body.

        The returned text keeps the last line's CRLF and excludes the
        terminating ``.`` line. A body that is only the terminator is empty.
        """
        # Terminator directly after the status line: nothing precedes it.
        self._fill(3)
        if self._buffer.startswith(b".\r\n"):
            self._buffer = self._buffer[3:]
            return ""

        data = self._read_until(BODY_TERMINATOR)
        return data[:-3].decode(ENCODING, ENCODING_ERRORS)

    def close(self, quit_command: Optional[str] = None) -> None:
        """
        Send the termination command (best effort) and release the socket.
        """
        if not self.socket:
            self.closed = True
            return
        try:
            if quit_command:
                # Never wait on an unresponsive server longer than QUIT_TIMEOUT
                self.socket.settimeout(min(self.timeout or QUIT_TIMEOUT, QUIT_TIMEOUT))
                self.send_line(quit_command)
                reply = self.read_line()
                self.logger.debug(f"Quit acknowledged: {reply}")
        except Exception as e:
            self.logger.warning(f"Error sending {quit_command!r}: {e}")
        finally:
            self._release()
            self.logger.info("Disconnected from server")

    def _release(self) -> None:
        try:
            if self.socket:
                self.socket.close()
        finally:
            self.socket = None
            self.closed = True
            self._buffer = b""

    def _require_socket(self) -> socket.socket:
        if not self.socket:
            raise ConnectionError("Not connected to server")
        return self.socket

    def _fail(self, error_class, error_msg: str) -> Exception:
        self.logger.error(error_msg)
        return error_class(error_msg)

    def _recv(self) -> None:
        sock = self._require_socket()
        try:
            chunk = sock.recv(RECV_SIZE)
        except socket.timeout:
            raise self._fail(TimeoutError, "Timeout while reading response")
        except OSError as e:
            raise self._fail(ConnectionError, f"Failed to read response: {e}")
        if not chunk:
            raise self._fail(ServerDisconnectionError, "Server disconnected during read")
        self._buffer += chunk

    def _fill(self, num_bytes: int) -> None:
        while len(self._buffer) < num_bytes:
            self._recv()

    def _read_until(self, delimiter: bytes) -> bytes:
        """Consume and return buffered bytes up to and including the delimiter."""
        start = 0
        while True:
            index = self._buffer.find(delimiter, start)
            if index >= 0:
                end = index + len(delimiter)
                data, self._buffer = self._buffer[:end], self._buffer[end:]
                return data
            start = max(0, len(self._buffer) - len(delimiter) + 1)
            self._recv()
