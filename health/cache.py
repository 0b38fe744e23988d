# ============================================================================
# RESULT CACHE
# ============================================================================
# STATUS: Infrastructure - Time-to-live cache for reports
# PURPOSE: Absorb probe storms by reusing recent reports per report type
# CREATED: 18 OCT 2026
# ============================================================================
"""
Result Cache

One entry per key (report type). An entry is fresh while its age is
below the TTL; stale entries are not evicted, they are overwritten by
the next computation.

With coalescing on, concurrent misses for the same key share a single
in-flight computation: the first caller computes while the others wait
on a per-key lock and then read the fresh entry. Keys never block each
other. Errors raised by a computation propagate and are not cached.

Every invalidation bumps a generation counter. A computation that started
before an invalidation still answers its own caller but is not stored,
so a report built from an outdated registry never re-enters the cache.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.CACHE)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached payload with its creation time (clock seconds)."""
    payload: T
    created_at: float

    def age_ms(self, now: float) -> float:
        return (now - self.created_at) * 1000


class ResultCache:
    """
    TTL cache keyed by report type.

    Args:
        ttl_ms: Maximum age of an entry; 0 disables caching
        clock: Monotonic clock in seconds (injectable for tests)
        coalesce: Share one in-flight computation per key
    """

    def __init__(
        self,
        ttl_ms: int,
        clock: Callable[[], float] = time.monotonic,
        coalesce: bool = True,
    ):
        self.ttl_ms = ttl_ms
        self.coalesce = coalesce
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._generation = 0

    @property
    def enabled(self) -> bool:
        return self.ttl_ms > 0

    def get(self, key: str) -> Optional[Any]:
        """Return the payload if fresh, else None."""
        entry = self._entries.get(key)
        if entry is None or not self.enabled:
            return None
        if entry.age_ms(self._clock()) >= self.ttl_ms:
            return None
        return entry.payload

    def set(self, key: str, payload: Any) -> None:
        """Store (or overwrite) the entry for key."""
        if not self.enabled:
            return
        self._entries[key] = CacheEntry(payload=payload, created_at=self._clock())

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one entry, or every entry when key is None."""
        self._generation += 1
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    async def get_or_compute(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
    ) -> Any:
        """
        Return a fresh entry, or compute, store and return a new one.

        Raises:
            Exception: Whatever the factory raised (nothing is stored)
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        if not self.coalesce or not self.enabled:
            return await self._compute(key, factory)

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have refreshed while we waited
            cached = self.get(key)
            if cached is not None:
                logger.debug(f"Cache hit after wait: {key}")
                return cached
            return await self._compute(key, factory)

    async def _compute(self, key: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        logger.debug(f"Cache miss: {key}")
        generation = self._generation
        payload = await factory()
        if generation == self._generation:
            self.set(key, payload)
        else:
            logger.debug(f"Invalidated during computation, not stored: {key}")
        return payload

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def generation(self) -> int:
        """Number of invalidations so far."""
        return self._generation


__all__ = [
    "CacheEntry",
    "ResultCache",
]
