# src/storage/supabase_store.py — v1
"""Supabase record store (RECORD_STORE=supabase).

Rows go to the PostgREST endpoint: ``POST /rest/v1/<table>`` with
``Prefer: return=representation`` so the inserted row (and its id) comes
back in the response. Files go to Storage: ``POST
/storage/v1/object/<bucket>/<name>`` with the raw bytes as body.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.parse
from typing import Any, Mapping

from petassist.core.errors import RecordStoreError
from petassist.core.http import request_json_async
from petassist.storage.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class SupabaseRecordStore(BaseRecordStore):
    """Insert rows and upload files through the Supabase REST API."""

    def __init__(self, url: str, api_key: str, timeout: float = 30.0) -> None:
        self._base_url = url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Prefer": "return=representation",
        }

    async def insert(self, table: str, record: Mapping[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/rest/v1/{table}"
        try:
            rows = await request_json_async(
                url,
                method="POST",
                payload=dict(record),
                headers=self._headers(),
                timeout=self._timeout,
            )
        except (urllib.error.URLError, ValueError, OSError) as e:
            logger.error("Insert into %s failed: %s", table, e)
            raise RecordStoreError(f"Insert into {table!r} failed: {e}") from e

        if isinstance(rows, list) and rows:
            return dict(rows[0])
        if isinstance(rows, dict):
            return rows
        raise RecordStoreError(f"Insert into {table!r} returned no row")

    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str
    ) -> str:
        url = f"{self._base_url}/storage/v1/object/{bucket}/{urllib.parse.quote(name)}"
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": content_type,
        }
        try:
            await request_json_async(
                url, method="POST", body=data, headers=headers, timeout=self._timeout,
            )
        except (urllib.error.URLError, ValueError, OSError) as e:
            logger.error("Upload to %s failed: %s", bucket, e)
            raise RecordStoreError(f"Upload to {bucket!r} failed: {e}") from e
        logger.debug("Uploaded %s to %s (%d bytes)", name, bucket, len(data))
        return name

    @property
    def backend_name(self) -> str:
        return "supabase"
