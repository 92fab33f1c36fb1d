# src/cache/base_cache_store.py — v1
"""Abstract response cache interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseCacheStore(ABC):
    """Unified interface for response cache backends."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None when absent or expired."""

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store or overwrite the value for key, stamping the current time."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @property
    @abstractmethod
    def ttl_seconds(self) -> float:
        """Time-to-live applied on lookup."""
