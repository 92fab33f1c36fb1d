# src/cache/models.py — v1
"""Cache domain model: CacheEntry."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Single cached response.

    ``stored_at`` is in the cache clock's units (seconds). The entry is
    fresh while ``now - stored_at <= ttl``.
    """

    key: str
    value: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) <= ttl_seconds
