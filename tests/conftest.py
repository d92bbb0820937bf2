"""
Shared fixtures for the NNTP client tests.
"""

import socket
from unittest.mock import patch

import pytest


GREETING = "200 news.example.com InterNetNews NNRP server ready\r\n"
ADDRINFO = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.10", 119))


class MockSocket:
    """Mock socket that replays scripted server data."""

    def __init__(self):
        self.sent_data = []
        self.receive_data = []
        self.receive_index = 0
        self.connected = False
        self.closed = False
        self.timeout = None
        self.address = None
        self.should_raise_on_connect = None
        self.should_raise_on_send = None
        self.should_raise_on_recv = None

    def connect(self, address):
        self.address = address
        if self.should_raise_on_connect:
            raise self.should_raise_on_connect
        self.connected = True

    def settimeout(self, timeout):
        self.timeout = timeout

    def sendall(self, data):
        if self.should_raise_on_send:
            raise self.should_raise_on_send
        self.sent_data.append(data)

    def recv(self, size):
        if self.should_raise_on_recv:
            raise self.should_raise_on_recv

        # Exhausted script simulates the server closing the connection
        if self.receive_index >= len(self.receive_data):
            return b""

        data = self.receive_data[self.receive_index]
        self.receive_index += 1

        if isinstance(data, Exception):
            raise data
        return data

    def close(self):
        self.connected = False
        self.closed = True

    def add_response(self, data):
        """Queue raw text or bytes to be returned by recv."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.receive_data.append(data)

    @property
    def commands(self):
        return [data.decode("utf-8").rstrip("\r\n") for data in self.sent_data]


@pytest.fixture
def mock_socket():
    """A scripted socket that has already queued the server greeting."""
    sock = MockSocket()
    sock.add_response(GREETING)
    with patch("socket.getaddrinfo", return_value=[ADDRINFO]), \
            patch("socket.socket", return_value=sock):
        yield sock
