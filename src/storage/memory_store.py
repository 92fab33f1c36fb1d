# src/storage/memory_store.py — v1
"""In-memory record store (RECORD_STORE=memory, the default)."""

from __future__ import annotations

import copy
from collections import defaultdict
from typing import Any, Mapping

from petassist.core.errors import RecordStoreError
from petassist.storage.base_record_store import BaseRecordStore


class MemoryRecordStore(BaseRecordStore):
    """Keeps inserted rows per table; ids are sequential per table from 1."""

    def __init__(self) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self._buckets: dict[str, dict[str, tuple[bytes, str]]] = defaultdict(dict)

    async def insert(self, table: str, record: Mapping[str, Any]) -> dict[str, Any]:
        rows = self._tables[table]
        row = {**copy.deepcopy(dict(record)), "id": len(rows) + 1}
        rows.append(row)
        return dict(row)

    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str
    ) -> str:
        objects = self._buckets[bucket]
        if name in objects:
            raise RecordStoreError(f"Object {name!r} already exists in {bucket!r}")
        objects[name] = (bytes(data), content_type)
        return name

    def rows(self, table: str) -> list[dict[str, Any]]:
        """Copy of every row inserted into a table."""
        return [dict(r) for r in self._tables.get(table, [])]

    def objects(self, bucket: str) -> dict[str, tuple[bytes, str]]:
        """Uploaded files of a bucket as name -> (data, content type)."""
        return dict(self._buckets.get(bucket, {}))

    @property
    def backend_name(self) -> str:
        return "memory"
