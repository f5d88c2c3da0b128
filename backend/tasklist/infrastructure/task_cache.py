"""Task Cache: in-process TTL cache for per-owner task listings.

Invariants:
    - An entry is never returned once it is older than the TTL (lazy expiry on get)
    - put() stamps a fresh creation time and overwrites any previous entry
    - Get/put/invalidate of a single key are atomic under one asyncio.Lock;
      concurrent puts to one key are last-write-wins
    - No size bound and no LRU: entries leave only by TTL or invalidation
    - None is the miss marker, so None is never stored
    - Every owner invalidation bumps that owner's generation; a put carrying
      an older generation is dropped, so a listing read before a mutation can
      never land in the cache after that mutation's invalidation

Design Decisions:
    - Monotonic clock (injectable) so wall-clock jumps cannot extend or cut TTLs
    - Optional background sweep only reclaims memory; correctness relies on
      the lazy check in get()
    - Keys are TaskCacheKey(owner_id, query) so one owner's entries can be
      dropped together after a mutation
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable

from tasklist.core.domain_types import TaskQuery, UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskCacheKey:
    owner_id: UserId
    query: TaskQuery = TaskQuery.ALL

    def __str__(self) -> str:
        return f"tasks:{self.owner_id}:{self.query.value}"


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    expirations: int = 0
    invalidations: int = 0


class TaskCache:
    """TTL cache with explicit invalidation."""

    def __init__(
        self,
        ttl_seconds: float = 600,
        sweep_interval_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._entries: dict[Hashable, CacheEntry] = {}
        # one counter per owner ever invalidated, plus one bumped by invalidate_all
        self._generations: dict[UserId, int] = {}
        self._epoch = 0
        self._sweep_task: asyncio.Task[None] | None = None
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self.ttl_seconds

    async def get(self, key: Hashable) -> Any | None:
        """Return the cached value, or None on miss or expiry."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats.misses += 1
                logger.debug("Cache miss", extra={"cache_key": key})
                return None
            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                self.stats.misses += 1
                self.stats.expirations += 1
                logger.debug("Cache entry expired", extra={"cache_key": key})
                return None
            self.stats.hits += 1
            logger.debug("Cache hit", extra={"cache_key": key})
            return entry.value

    def generation(self, owner_id: UserId) -> int:
        """Current invalidation generation for one owner.

        Both counters only grow, so their sum changes whenever either does.
        """
        return self._epoch + self._generations.get(owner_id, 0)

    async def put(
        self, key: Hashable, value: Any, generation: int | None = None,
    ) -> bool:
        """Store value under key. Returns whether it was stored.

        With a generation (read before loading value), the put is dropped if
        the key's owner was invalidated since.
        """
        if value is None:
            raise ValueError("None cannot be cached (it marks a miss)")
        async with self._lock:
            if (
                generation is not None
                and isinstance(key, TaskCacheKey)
                and self.generation(key.owner_id) != generation
            ):
                logger.debug(
                    "Stale cache fill dropped", extra={"cache_key": key},
                )
                return False
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        return True

    async def invalidate(self, key: Hashable) -> bool:
        """Drop one key. Returns whether an entry was present."""
        async with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            self.stats.invalidations += 1
        return removed

    async def invalidate_owner(self, owner_id: UserId) -> int:
        """Drop every query shape cached for one owner."""
        async with self._lock:
            self._generations[owner_id] = self._generations.get(owner_id, 0) + 1
            keys = [
                k for k in self._entries
                if isinstance(k, TaskCacheKey) and k.owner_id == owner_id
            ]
            for k in keys:
                del self._entries[k]
        self.stats.invalidations += len(keys)
        if keys:
            logger.debug(
                f"Invalidated {len(keys)} cache entries",
                extra={"user_id": owner_id},
            )
        return len(keys)

    async def invalidate_all(self) -> int:
        async with self._lock:
            self._epoch += 1
            count = len(self._entries)
            self._entries.clear()
        self.stats.invalidations += count
        return count

    async def purge_expired(self) -> int:
        """Physically remove expired entries. Returns how many were removed."""
        now = self._clock()
        async with self._lock:
            expired = [
                k for k, e in self._entries.items() if self._is_expired(e, now)
            ]
            for k in expired:
                del self._entries[k]
        self.stats.expirations += len(expired)
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def start(self) -> None:
        """Start the background sweep if an interval is configured."""
        if self.sweep_interval_seconds <= 0 or self._sweep_task is not None:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            await self.purge_expired()

    async def shutdown(self) -> None:
        """Stop the sweep and drop all entries."""
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
            self._sweep_task = None
        await self.invalidate_all()
        logger.info("Task cache shut down")

    def snapshot_stats(self) -> dict:
        return {
            "entries": len(self._entries),
            "hits": self.stats.hits,
            "misses": self.stats.misses,
            "expirations": self.stats.expirations,
            "invalidations": self.stats.invalidations,
        }


# Singleton (initialized on startup)
task_cache: TaskCache | None = None


def init_cache(
    ttl_seconds: float = 600, sweep_interval_seconds: float = 0,
) -> TaskCache:
    global task_cache
    task_cache = TaskCache(ttl_seconds, sweep_interval_seconds)
    return task_cache


async def close_cache() -> None:
    global task_cache
    if task_cache is not None:
        await task_cache.shutdown()
        task_cache = None


def get_task_cache() -> TaskCache:
    """FastAPI dependency for the process-wide task cache."""
    if task_cache is None:
        raise RuntimeError("Task cache not initialized")
    return task_cache
