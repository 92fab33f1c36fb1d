# src/cache/cache_factory.py — v1
"""Factory for the response cache owned by the application context."""

from __future__ import annotations

import time
from typing import Callable

from petassist.cache.base_cache_store import BaseCacheStore
from petassist.cache.memory_store import DEFAULT_TTL_SECONDS, MemoryCacheStore
from petassist.config.settings import Settings


def create_cache_store(
    settings: Settings | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> BaseCacheStore:
    """Instantiate a fresh response cache.

    Every call returns a new, empty store; there is no module-level
    singleton, so tests and separate assistants never share entries.
    """
    ttl = DEFAULT_TTL_SECONDS if settings is None else settings.cache_ttl_seconds
    return MemoryCacheStore(ttl_seconds=ttl, clock=clock)
