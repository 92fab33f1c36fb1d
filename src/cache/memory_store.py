# src/cache/memory_store.py — v1
"""In-process TTL cache for AI responses.

Expiry is lazy: a stale entry stays in the map and is masked on lookup
until the same key is written again. There is no size bound and no
eviction, so entries accumulate for the lifetime of the owning context.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from petassist.cache.base_cache_store import BaseCacheStore
from petassist.cache.models import CacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache with time-based expiry checked on read."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock(), self._ttl):
            logger.debug("Cache entry expired: %s", _short(key))
            return None
        return entry.value

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def entry(self, key: str) -> CacheEntry | None:
        """Raw stored entry, expired or not."""
        return self._entries.get(key)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def stored_count(self) -> int:
        """Number of stored entries, including expired ones."""
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for e in self._entries.values() if e.is_fresh(now, self._ttl))


def _short(key: str, width: int = 40) -> str:
    return key if len(key) <= width else key[:width] + "..."
