"""In-memory TTL cache with lazy eviction.

Simple process-level cache for geocoding and prayer-data responses.
Survives across requests in the same uvicorn worker, never across restarts.
No size bound and no background sweeper: a stale entry is only removed when
it is looked up again.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from app.models import CacheEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], int]


def system_clock_ms() -> int:
    """Current UTC epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def normalize_city(city: str) -> str:
    """Normalize a city query for use as a cache key."""
    return city.strip().lower()


class TTLCache(Generic[T]):
    """TTL-aware cache keyed by string.

    Entries are replaced, never mutated. Concurrent misses for the same key
    both write and the last write wins (see ``SingleFlight`` to avoid that).
    """

    def __init__(self, ttl_ms: int, clock: Clock = system_clock_ms, name: str = "cache") -> None:
        self._store: dict[str, CacheEntry[T]] = {}
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._name = name

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def now(self) -> int:
        return self._clock()

    def get(self, key: str) -> T | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_fresh(self._clock()):
            return entry.value
        del self._store[key]
        logger.debug(f"[CACHE] {self._name}: evicted stale entry {key!r}")
        return None

    def set(self, key: str, value: T) -> CacheEntry[T]:
        entry = CacheEntry(value=value, expires_at=self._clock() + self._ttl_ms)
        self._store.pop(key, None)
        self._store[key] = entry
        return entry

    def entry(self, key: str) -> CacheEntry[T] | None:
        """Raw entry lookup, stale or not. Does not evict."""
        return self._store.get(key)

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


class SingleFlight(Generic[T]):
    """Share one in-flight coroutine between concurrent callers of the same key.

    The shared task is shielded: a caller being cancelled does not cancel the
    upstream call for the others.
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Task[T]] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._inflight[key] = task

            def _forget(done: asyncio.Task[T]) -> None:
                if self._inflight.get(key) is done:
                    del self._inflight[key]

            task.add_done_callback(_forget)
        else:
            logger.debug(f"[CACHE] joining in-flight request for {key!r}")
        return await asyncio.shield(task)
