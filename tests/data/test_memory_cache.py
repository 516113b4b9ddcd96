"""Tests for MemoryCache."""

from __future__ import annotations

import pytest

from wingo.data.memory_cache import DEFAULT_TTL, MemoryCache
from wingo.interfaces import PredictionCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


class TestMemoryCache:
    def test_satisfies_protocol(self, cache: MemoryCache) -> None:
        assert isinstance(cache, PredictionCache)

    def test_default_ttl(self) -> None:
        assert MemoryCache()._default_ttl == DEFAULT_TTL

    @pytest.mark.asyncio()
    async def test_get_missing(self, cache: MemoryCache) -> None:
        assert await cache.get("nope") is None
        assert not await cache.has("nope")

    @pytest.mark.asyncio()
    async def test_set_then_get(self, cache: MemoryCache) -> None:
        await cache.set("k", {"prediction": "BIG"}, ttl=60)
        assert await cache.get("k") == {"prediction": "BIG"}
        assert await cache.has("k")

    @pytest.mark.asyncio()
    async def test_expires_after_ttl(self, cache: MemoryCache, clock: FakeClock) -> None:
        await cache.set("k", "v", ttl=60)

        clock.advance(60)
        assert await cache.get("k") == "v"

        clock.advance(0.5)
        assert await cache.get("k") is None
        assert len(cache) == 0

    @pytest.mark.asyncio()
    async def test_default_ttl_applies(self, clock: FakeClock) -> None:
        cache = MemoryCache(default_ttl=5, clock=clock)
        await cache.set("k", "v")
        clock.advance(6)
        assert await cache.get("k") is None

    @pytest.mark.asyncio()
    async def test_set_replaces_and_refreshes(
        self, cache: MemoryCache, clock: FakeClock
    ) -> None:
        await cache.set("k", "old", ttl=10)
        clock.advance(8)
        await cache.set("k", "new", ttl=10)
        clock.advance(8)
        assert await cache.get("k") == "new"

    @pytest.mark.asyncio()
    async def test_delete(self, cache: MemoryCache) -> None:
        await cache.set("k", "v")
        await cache.delete("k")
        await cache.delete("k")
        assert await cache.get("k") is None
