"""
TTL Cache
=========

Process-local key-value store with per-entry expiry.

The cache backs three kinds of data:
- Market data (price 60s fresh / 300s stale, fees 30s, history 1h)
- Socratic question selections (30 minutes)
- Generated assessments (30 minutes)

Entries remember when they were stored, so a caller can ask for a value
that is at most N seconds old while older (but not yet expired) values stay
available as a stale fallback when an upstream fetch fails.

Concurrent computations of the same key can be collapsed with
get_or_create(): the first caller runs the factory, later callers await
the same future.

Usage:
    from src.utils.cache import cache_store

    cache_store.set("btc_price_usd", 65000.0, ttl_seconds=300)
    cache_store.get("btc_price_usd", max_age_seconds=60)

    assessment = await cache_store.get_or_create(
        "assessment_fees_beginner_5", build_assessment, ttl_seconds=1800
    )
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from src.utils.logger import Logger

logger = Logger("Cache")


@dataclass
class CacheEntry:
    """
    A single cached value.

    Attributes:
        value: The cached object
        stored_at: Clock reading when the value was stored
        expires_at: Clock reading after which the value is gone
    """
    value: Any
    stored_at: float
    expires_at: float


class TTLCache:
    """
    Key-value store where entries expire after a time-to-live.

    Example:
        cache = TTLCache(clock=fake_clock)
        cache.set("fees", {"fastestFee": 12}, ttl_seconds=60)
        cache.get("fees")                       # -> {"fastestFee": 12}
        cache.get("fees", max_age_seconds=30)   # None once 30s have passed
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds, injectable for tests
        """
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Future] = {}

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store a value for ttl_seconds."""
        now = self._clock()
        self._entries[key] = CacheEntry(value=value, stored_at=now, expires_at=now + ttl_seconds)

    def get(self, key: str, max_age_seconds: float | None = None) -> Any | None:
        """
        Get a value if it has not expired.

        Args:
            key: Cache key
            max_age_seconds: Additionally require the value to be at most
                this old. Older values are kept, just not returned.

        Returns:
            The cached value, or None
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        now = self._clock()
        if now >= entry.expires_at:
            del self._entries[key]
            return None
        if max_age_seconds is not None and now - entry.stored_at > max_age_seconds:
            return None
        return entry.value

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if now < entry.expires_at)

    async def get_or_create(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: float
    ) -> Any:
        """
        Return the cached value or build it once.

        While a factory for `key` is running, other callers for the same
        key wait for its result instead of starting their own. A failing
        factory propagates its exception to every waiter and nothing is
        cached.

        Args:
            key: Cache key
            factory: Zero-argument coroutine function producing the value
            ttl_seconds: Lifetime of the stored value

        Returns:
            The cached or freshly built value
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        pending = self._inflight.get(key)
        if pending is not None:
            logger.debug(f"Joining in-flight computation: {key}")
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await factory()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unobserved failure does not warn at GC time
            future.exception()
            raise
        else:
            self.set(key, value, ttl_seconds)
            future.set_result(value)
            return value
        finally:
            self._inflight.pop(key, None)


# Shared cache instance used by tools and agents
cache_store = TTLCache()
