"""Concrete infrastructure implementations and shared helpers."""

from .cache import TTLCache
from .http import ShopifyHttpInvoker, extract_error_payload
from .resilience import RateLimiter, RetryPolicy, with_retry

__all__ = [
    "RateLimiter",
    "RetryPolicy",
    "ShopifyHttpInvoker",
    "TTLCache",
    "extract_error_payload",
    "with_retry",
]
