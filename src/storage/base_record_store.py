# src/storage/base_record_store.py — v1
"""Abstract record store interface (pets, health records, predictions)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class BaseRecordStore(ABC):
    """Unified interface for persistence backends."""

    @abstractmethod
    async def insert(self, table: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one record and return it as stored, including its ``id``."""

    @abstractmethod
    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str
    ) -> str:
        """Store a file in a bucket and return its path within the bucket."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (memory, supabase)."""
