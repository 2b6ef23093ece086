"""Query cache — process-wide result cache with blanket per-collection invalidation.

Results are keyed by the collection name plus the exact request parameters
that produced them. Any successful mutation of a collection drops every
cached entry of that collection, whatever its parameters; precise
dependency tracking across search/sort/page combinations is not attempted.

Concurrent reads of the same key share one in-flight load. A load that was
started before an invalidation still answers the callers that were already
waiting on it, but its result is never stored and callers arriving after
the invalidation start a new load.

Loads issued with ``keep=False`` are coalesced but never stored. Collections
written by other processes are read that way, since nothing here could
invalidate them.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheKey:
    """Collection name plus the full tuple of read parameters."""

    collection: str
    params: tuple[Any, ...]


@dataclass
class CacheStats:
    """Counters for hit-rate logging."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    invalidations: int = 0


class QueryCache:
    """Read-through cache of store results.

    Only the mutation path writes to it, and only through ``invalidate``.
    Build one per process (or per test) and share it between all views.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}
        self._inflight: dict[CacheKey, asyncio.Future[Any]] = {}
        self.stats = CacheStats()

    async def get_or_load(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[T]],
        *,
        keep: bool = True,
    ) -> T:
        """Return the cached value for ``key`` or run ``loader`` to produce one.

        A failing loader leaves the cache exactly as it was and the error
        propagates to every caller waiting on that load.
        """
        if key in self._entries:
            self.stats.hits += 1
            logger.debug("Cache hit %s %s", key.collection, key.params)
            return self._entries[key]

        pending = self._inflight.get(key)
        if pending is not None:
            self.stats.coalesced += 1
            logger.debug("Joining in-flight load %s %s", key.collection, key.params)
            # shield: a cancelled waiter must not cancel the shared load
            return await asyncio.shield(pending)

        self.stats.misses += 1
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await loader()
        except asyncio.CancelledError:
            self._detach(key, future)
            future.cancel()
            raise
        except Exception as exc:
            self._detach(key, future)
            future.set_exception(exc)
            # Mark retrieved so an unawaited future does not log a warning
            future.exception()
            raise

        still_current = self._inflight.get(key) is future
        self._detach(key, future)
        if still_current and keep:
            self._entries[key] = value
        elif not still_current:
            logger.debug("Discarding result invalidated mid-flight %s %s", key.collection, key.params)
        future.set_result(value)
        return value

    def invalidate(self, collection: str) -> int:
        """Drop every entry of ``collection``. Returns how many were dropped."""
        name = getattr(collection, "value", collection)
        stale = [key for key in self._entries if key.collection == name]
        for key in stale:
            del self._entries[key]
        for key in [k for k in self._inflight if k.collection == name]:
            del self._inflight[key]
        if stale:
            self.stats.invalidations += 1
            logger.info("Invalidated %d cached result(s) for '%s'", len(stale), name)
        return len(stale)

    def invalidate_key(self, key: CacheKey) -> bool:
        """Drop a single entry. Returns False when nothing was cached."""
        self._inflight.pop(key, None)
        if key not in self._entries:
            return False
        del self._entries[key]
        self.stats.invalidations += 1
        return True

    def is_fresh(self, key: CacheKey) -> bool:
        return key in self._entries

    def clear(self) -> None:
        """Drop every entry and forget in-flight loads."""
        self._entries.clear()
        self._inflight.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _detach(self, key: CacheKey, future: asyncio.Future[Any]) -> None:
        if self._inflight.get(key) is future:
            del self._inflight[key]
