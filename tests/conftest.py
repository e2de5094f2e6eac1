"""Pytest fixtures for testing.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from tests.fakes import FakeClock, FakeHttpInvoker, FakeShopifyClient, RecordingSleeper
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self, *args, **kwargs):
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch):
    """Block all network access in tests.

    This fixture runs automatically for all tests and prevents any real
    network connections. Tests that need HTTP should use FakeHttpInvoker
    or a MagicMock(spec=requests.Session).
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def sleeper(fake_clock: FakeClock) -> RecordingSleeper:
    """Provide an async sleep that records delays and advances the fake clock."""
    return RecordingSleeper(clock=fake_clock)


@pytest.fixture
def fake_invoker() -> FakeHttpInvoker:
    """Provide an HTTP invoker with no queued results."""
    return FakeHttpInvoker()


@pytest.fixture
def fake_client() -> FakeShopifyClient:
    """Provide a Shopify client fake with default canned results."""
    return FakeShopifyClient()


@pytest.fixture
def sample_product_node() -> dict[str, object]:
    """A product as returned by the Admin GraphQL API."""
    return {
        "id": "gid://shopify/Product/123456789",
        "handle": "classic-tee",
        "title": "Classic Tee",
        "description": "Soft cotton tee",
        "images": {"edges": [{"node": {"src": "https://cdn.example/tee.png"}}]},
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/11",
                        "title": "Small",
                        "price": "20.00",
                        "sku": "TEE-S",
                        "availableForSale": True,
                        "inventoryPolicy": "DENY",
                    }
                }
            ]
        },
    }
