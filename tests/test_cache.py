"""
Tests for the TTL cache
=======================
"""

import asyncio

import pytest

from src.utils.cache import TTLCache


class TestTTLCache:
    """Expiry and freshness."""

    def test_get_returns_value_before_expiry(self, cache: TTLCache, fake_clock) -> None:
        cache.set("fees", {"fastestFee": 12}, ttl_seconds=60)
        fake_clock.advance(59)

        assert cache.get("fees") == {"fastestFee": 12}

    def test_get_drops_expired_value(self, cache: TTLCache, fake_clock) -> None:
        cache.set("fees", {"fastestFee": 12}, ttl_seconds=60)
        fake_clock.advance(60)

        assert cache.get("fees") is None
        assert len(cache) == 0

    def test_max_age_hides_old_but_unexpired_value(self, cache: TTLCache, fake_clock) -> None:
        cache.set("price", 65000.0, ttl_seconds=300)
        fake_clock.advance(61)

        assert cache.get("price", max_age_seconds=60) is None
        assert cache.get("price") == 65000.0

    def test_delete_and_contains(self, cache: TTLCache) -> None:
        cache.set("k", 1, ttl_seconds=10)

        assert "k" in cache
        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert "k" not in cache


class TestGetOrCreate:
    """In-flight de-duplication."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_computation(self, cache: TTLCache) -> None:
        calls = 0
        release = asyncio.Event()

        async def factory() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "built"

        tasks = [asyncio.create_task(cache.get_or_create("key", factory, 60)) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()

        assert await asyncio.gather(*tasks) == ["built"] * 5
        assert calls == 1
        assert cache.get("key") == "built"

    @pytest.mark.asyncio
    async def test_cached_value_skips_factory(self, cache: TTLCache) -> None:
        cache.set("key", "cached", ttl_seconds=60)

        async def factory() -> str:
            raise AssertionError("factory should not run")

        assert await cache.get_or_create("key", factory, 60) == "cached"

    @pytest.mark.asyncio
    async def test_failure_propagates_and_is_not_cached(self, cache: TTLCache) -> None:
        async def factory() -> str:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await cache.get_or_create("key", factory, 60)

        assert cache.get("key") is None
