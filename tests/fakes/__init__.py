"""Exports for test fakes."""

from .clock import FakeClock, RecordingSleeper
from .http import FakeHttpInvoker, GraphqlCall, RestCall
from .resilience import FakeRateLimiter
from .shopify_client import FakeShopifyClient

__all__ = [
    "FakeClock",
    "FakeHttpInvoker",
    "FakeRateLimiter",
    "FakeShopifyClient",
    "GraphqlCall",
    "RecordingSleeper",
    "RestCall",
]
