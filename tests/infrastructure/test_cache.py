"""Tests for the TTL cache."""

import asyncio

import pytest

from shopify_tools.infrastructure.cache import DEFAULT_TTL_SECONDS, TTLCache
from tests.fakes import FakeClock


def test_get_returns_value_before_expiry(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.set("shop", {"name": "Demo"})

    fake_clock.advance(DEFAULT_TTL_SECONDS)

    assert cache.get("shop") == {"name": "Demo"}


def test_get_returns_none_after_ttl_and_drops_entry(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.set("shop", {"name": "Demo"}, ttl_seconds=10)

    fake_clock.advance(10.001)

    assert cache.get("shop") is None
    assert len(cache) == 0


def test_missing_key_returns_none() -> None:
    assert TTLCache().get("missing") is None


def test_delete_and_clear(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    assert "a" not in cache
    assert "b" in cache

    cache.clear()
    assert len(cache) == 0


def test_cleanup_removes_only_expired_entries(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    cache.set("short", 1, ttl_seconds=1)
    cache.set("long", 2, ttl_seconds=100)

    fake_clock.advance(5)

    assert cache.cleanup() == 1
    assert cache.get("long") == 2
    assert len(cache) == 1


def test_get_or_set_calls_getter_once_per_key(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    calls = 0

    async def getter() -> str:
        nonlocal calls
        calls += 1
        return "USD"

    async def run() -> list[str]:
        return [await cache.get_or_set("currency", getter) for _ in range(3)]

    assert asyncio.run(run()) == ["USD", "USD", "USD"]
    assert calls == 1


def test_get_or_set_refreshes_after_expiry(fake_clock: FakeClock) -> None:
    cache = TTLCache(clock=fake_clock)
    values = iter(["first", "second"])

    async def getter() -> str:
        return next(values)

    async def run() -> tuple[str, str]:
        first = await cache.get_or_set("k", getter, ttl_seconds=1)
        fake_clock.advance(2)
        second = await cache.get_or_set("k", getter, ttl_seconds=1)
        return first, second

    assert asyncio.run(run()) == ("first", "second")


def test_concurrent_misses_share_one_getter_call() -> None:
    cache = TTLCache()
    calls = 0

    async def getter() -> str:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0)
        return "value"

    async def run() -> list[str]:
        return list(await asyncio.gather(*(cache.get_or_set("k", getter) for _ in range(5))))

    assert asyncio.run(run()) == ["value"] * 5
    assert calls == 1


def test_failing_getter_propagates_to_waiters_and_caches_nothing() -> None:
    cache = TTLCache()
    calls = 0

    async def getter() -> str:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0)
        raise RuntimeError("boom")

    async def run() -> list[object]:
        return list(
            await asyncio.gather(
                *(cache.get_or_set("k", getter) for _ in range(3)), return_exceptions=True
            )
        )

    results = asyncio.run(run())

    assert calls == 1
    assert all(isinstance(result, RuntimeError) for result in results)
    assert cache.get("k") is None


def test_failed_getter_is_retried_on_next_call() -> None:
    cache = TTLCache()
    attempts = iter([RuntimeError("boom"), "ok"])

    async def getter() -> str:
        outcome = next(attempts)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def run() -> str:
        with pytest.raises(RuntimeError):
            await cache.get_or_set("k", getter)
        return await cache.get_or_set("k", getter)

    assert asyncio.run(run()) == "ok"
