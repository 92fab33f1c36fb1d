# src/core/http.py — v1
"""Minimal JSON-over-HTTP helper for the REST collaborators.

Uses urllib.request; blocking calls run in a worker thread so the event
loop stays free while a collaborator responds.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.parse
import urllib.request
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


def build_url(base: str, params: Mapping[str, Any] | None = None) -> str:
    """Append URL-encoded query params, skipping None values."""
    if not params:
        return base
    query = urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})
    return f"{base}{'&' if '?' in base else '?'}{query}"


def request_json(
    url: str,
    method: str = "GET",
    payload: Any = None,
    headers: Mapping[str, str] | None = None,
    form: Mapping[str, str] | None = None,
    body: bytes | None = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> Any:
    """Perform a request and decode the JSON body (None when empty).

    ``body`` is sent as-is; set its Content-Type in ``headers``.

    Raises:
        urllib.error.URLError / HTTPError: On transport or HTTP failures.
        ValueError: If the response is not UTF-8 JSON (JSONDecodeError,
            UnicodeDecodeError).
    """
    req_headers = {"Accept": "application/json", **(headers or {})}
    data: bytes | None = None
    if form is not None:
        data = urllib.parse.urlencode(form).encode("utf-8")
        req_headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
    elif payload is not None:
        data = json.dumps(payload, default=str).encode("utf-8")
        req_headers.setdefault("Content-Type", "application/json")
    elif body is not None:
        data = body

    req = urllib.request.Request(url, data=data, headers=req_headers, method=method)
    logger.debug("%s %s", method, url.split("?", 1)[0])
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        text = resp.read().decode("utf-8")
    return json.loads(text) if text.strip() else None


async def request_json_async(url: str, **kwargs: Any) -> Any:
    """Async wrapper around request_json."""
    return await asyncio.to_thread(request_json, url, **kwargs)
