# src/storage/store_factory.py — v1
"""Factory: instantiate the record store from configuration."""

from __future__ import annotations

from petassist.config.settings import Settings
from petassist.storage.base_record_store import BaseRecordStore
from petassist.storage.memory_store import MemoryRecordStore


def create_record_store(settings: Settings) -> BaseRecordStore:
    """Create the record store named by RECORD_STORE.

    Raises:
        ValueError: If the backend is not supported.
    """
    if settings.record_store == "memory":
        return MemoryRecordStore()

    if settings.record_store == "supabase":
        from petassist.storage.supabase_store import SupabaseRecordStore

        return SupabaseRecordStore(url=settings.supabase_url, api_key=settings.supabase_key)

    raise ValueError(f"Unsupported record store: {settings.record_store!r}")
