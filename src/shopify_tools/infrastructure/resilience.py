"""Resilience utilities for infrastructure.

Usage example:
    from shopify_tools.infrastructure.resilience import RateLimiter, RetryPolicy, with_retry

    rate_limiter = RateLimiter(min_delay_seconds=0.5)
    policy = RetryPolicy(max_retries=3)
    shop = await with_retry(lambda: invoker.rest("GET", "shop"), policy)
"""

from __future__ import annotations

import asyncio
import re
import time
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field, replace
from typing import TypeVar, override

from ..observability import get_logger
from ..protocols import Clock, Sleeper
from ..protocols import RateLimiter as RateLimiterProtocol

T = TypeVar("T")

logger = get_logger("shopify_tools.infrastructure.resilience")

RetryPattern = str | re.Pattern[str]


def _default_retryable_errors() -> tuple[RetryPattern, ...]:
    return (
        re.compile(r"rate limit", re.IGNORECASE),
        re.compile(r"timeout|timed out", re.IGNORECASE),
        re.compile(r"network", re.IGNORECASE),
        re.compile(r"\b5\d\d\b"),
        "ECONNRESET",
        "ETIMEDOUT",
        "ECONNREFUSED",
        "Connection reset",
        "Connection refused",
        "Connection aborted",
    )


def _unsent_request_errors() -> tuple[RetryPattern, ...]:
    # Failures where Shopify never saw the request: throttled or refused.
    return (
        re.compile(r"rate limit", re.IGNORECASE),
        "ECONNREFUSED",
        "Connection refused",
    )


@dataclass
class RateLimiter(RateLimiterProtocol):
    """Minimum spacing between consecutive outbound requests.

    A single timestamp, not a window or bucket: it guarantees
    `min_delay_seconds` between calls and nothing more. Share one instance
    across every caller that should be throttled together.
    """

    min_delay_seconds: float = 0.5
    clock: Clock = field(default=time.monotonic, repr=False)
    sleep: Sleeper = field(default=asyncio.sleep, repr=False)
    last_request_time: float | None = field(default=None, init=False)

    @override
    async def enforce_rate_limit(self) -> None:
        """Suspend until `min_delay_seconds` have passed since the last request."""
        if self.last_request_time is not None:
            elapsed = self.clock() - self.last_request_time
            if elapsed < self.min_delay_seconds:
                remaining = self.min_delay_seconds - elapsed
                logger.debug("Rate limiting: waiting %.3fs", remaining)
                await self.sleep(remaining)
        self.last_request_time = self.clock()


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for transient failures.

    `max_retries` counts total attempts. An error is retried only when its
    message matches one of `retryable_errors` (regex search or substring).
    """

    max_retries: int = 3
    initial_delay_seconds: float = 1.0
    max_delay_seconds: float = 10.0
    backoff_factor: float = 2.0
    retryable_errors: tuple[RetryPattern, ...] = field(default_factory=_default_retryable_errors)

    def is_retryable(self, error: BaseException) -> bool:
        message = str(error)
        for pattern in self.retryable_errors:
            if isinstance(pattern, re.Pattern):
                if pattern.search(message):
                    return True
            elif pattern in message:
                return True
        return False

    def for_unsafe_operations(self) -> RetryPolicy:
        """Same backoff, retrying only failures where the request never arrived.

        Mutations may already have been applied when a response is lost, so
        timeouts, resets and 5xx responses are not retried.
        """
        return replace(self, retryable_errors=_unsent_request_errors())

    def next_delay(self, delay: float) -> float:
        return min(delay * self.backoff_factor, self.max_delay_seconds)

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry, in order."""
        delay = min(self.initial_delay_seconds, self.max_delay_seconds)
        for _ in range(max(self.max_retries - 1, 0)):
            yield delay
            delay = self.next_delay(delay)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    *,
    sleep: Sleeper = asyncio.sleep,
) -> T:
    """Await `operation()`, retrying retryable failures with backoff.

    The last error is re-raised unchanged when it is not retryable or the
    attempts are exhausted.
    """
    policy = policy or RetryPolicy()
    attempts = max(policy.max_retries, 1)
    delay = min(policy.initial_delay_seconds, policy.max_delay_seconds)
    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as error:
            if attempt >= attempts or not policy.is_retryable(error):
                raise
            logger.warning(
                "Operation failed (attempt %d/%d), retrying in %.0fms: %s",
                attempt,
                attempts,
                delay * 1000,
                error,
            )
            await sleep(delay)
            delay = policy.next_delay(delay)
            attempt += 1
