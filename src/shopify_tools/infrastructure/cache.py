"""Cache implementations for infrastructure.

Usage example:
    from shopify_tools.infrastructure.cache import TTLCache

    cache = TTLCache(default_ttl_seconds=300)
    cache.set("shop", {"name": "Demo"})
    shop = await cache.get_or_set("shop", load_shop)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar, cast, override

from ..protocols import Cache, Clock

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    value: object
    expires_at: float


def _empty_entries() -> dict[str, CacheEntry]:
    return {}


def _empty_in_flight() -> dict[str, asyncio.Future[Any]]:
    return {}


@dataclass
class TTLCache(Cache):
    """In-memory cache whose entries expire `ttl_seconds` after being set.

    Expiry is lazy: `get` drops an expired entry when it sees one, and
    `cleanup` sweeps the whole map when the caller asks. Concurrent
    `get_or_set` misses for the same key share a single getter call.
    Not thread-safe; use from one event loop.
    """

    default_ttl_seconds: float = DEFAULT_TTL_SECONDS
    clock: Clock = field(default=time.monotonic, repr=False)
    _entries: dict[str, CacheEntry] = field(default_factory=_empty_entries, repr=False)
    _in_flight: dict[str, asyncio.Future[Any]] = field(
        default_factory=_empty_in_flight, repr=False
    )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    @override
    def set(self, key: str, value: object, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = CacheEntry(value=value, expires_at=self.clock() + ttl)

    @override
    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() > entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    @override
    async def get_or_set(
        self,
        key: str,
        getter: Callable[[], Awaitable[T]],
        ttl_seconds: float | None = None,
    ) -> T:
        cached = self.get(key)
        if cached is not None:
            return cast(T, cached)

        pending = self._in_flight.get(key)
        if pending is not None:
            return cast(T, await asyncio.shield(pending))

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            value = await getter()
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved so an unobserved failure does not warn on GC.
            future.exception()
            raise
        except BaseException:
            future.cancel()
            raise
        else:
            self.set(key, value, ttl_seconds)
            future.set_result(value)
            return value
        finally:
            self._in_flight.pop(key, None)

    @override
    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    @override
    def clear(self) -> None:
        self._entries.clear()

    @override
    def cleanup(self) -> int:
        now = self.clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)
