"""Test that network access is properly blocked in tests."""

import socket

import pytest

from tests.support.errors import NetworkIsolationError


class TestNetworkBlocking:
    """Verify that the network blocking fixture works."""

    def test_socket_connect_is_blocked(self) -> None:
        """Attempting to connect a socket should raise NetworkIsolationError."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            with pytest.raises(NetworkIsolationError) as exc_info:
                sock.connect(("127.0.0.1", 443))
            assert "Tests must not make network connections" in str(exc_info.value)
        finally:
            sock.close()
