"""Unit tests for ActiveTopicCache."""

from unittest.mock import AsyncMock

import pytest

from costkb.domain.topic.service.cache import ActiveTopicCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_source(*names: str) -> AsyncMock:
    source = AsyncMock()
    source.list_active_names.return_value = set(names)
    return source


class TestActiveTopicCache:
    @pytest.mark.asyncio
    async def test_first_read_loads(self):
        clock = FakeClock()
        cache = ActiveTopicCache(ttl=60, clock=clock)
        source = _make_source("OC4IDS")

        assert cache.is_stale()
        assert await cache.get(source) == frozenset({"OC4IDS"})
        assert cache.loaded_at == clock.now

    @pytest.mark.asyncio
    async def test_fresh_cache_does_not_reload(self):
        clock = FakeClock()
        cache = ActiveTopicCache(ttl=60, clock=clock)
        source = _make_source("OC4IDS")

        await cache.get(source)
        clock.advance(59)
        source.list_active_names.return_value = {"Guidance Notes"}

        assert await cache.get(source) == frozenset({"OC4IDS"})
        source.list_active_names.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reloads_after_ttl(self):
        clock = FakeClock()
        cache = ActiveTopicCache(ttl=60, clock=clock)
        source = _make_source("OC4IDS")

        await cache.get(source)
        clock.advance(60)
        source.list_active_names.return_value = {"Guidance Notes"}

        assert cache.is_stale()
        assert await cache.get(source) == frozenset({"Guidance Notes"})
        assert source.list_active_names.await_count == 2

    @pytest.mark.asyncio
    async def test_invalidate_forces_reload(self):
        cache = ActiveTopicCache(clock=FakeClock())
        source = _make_source("OC4IDS")

        await cache.get(source)
        cache.invalidate()

        assert cache.is_stale()
        await cache.get(source)
        assert source.list_active_names.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_topic_set_is_cached(self):
        cache = ActiveTopicCache(clock=FakeClock())
        source = _make_source()

        assert await cache.get(source) == frozenset()
        assert await cache.get(source) == frozenset()
        source.list_active_names.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_zero_ttl_reloads_every_read(self):
        cache = ActiveTopicCache(ttl=0, clock=FakeClock())
        source = _make_source("OC4IDS")

        first = await cache.get(source)
        source.list_active_names.return_value = {"Guidance Notes"}
        second = await cache.get(source)

        assert (first, second) == (frozenset({"OC4IDS"}), frozenset({"Guidance Notes"}))
        assert source.list_active_names.await_count == 2
