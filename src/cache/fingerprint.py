# src/cache/fingerprint.py — v1
"""Cache key derivation from request content.

Keys are namespaced by feature ("symptoms-", "media-", ...):

- text: lower-cased, trimmed input;
- binary: the first 100 characters of the base64 body. This is a weak
  fingerprint; two attachments sharing that prefix share a key;
- structured: canonical JSON (sorted keys), lower-cased and trimmed.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

BINARY_PREFIX_CHARS = 100


def text_key(namespace: str, text: str) -> str:
    return f"{namespace}-{normalize_text(text)}"


def binary_key(namespace: str, base64_payload: str) -> str:
    return f"{namespace}-{base64_payload[:BINARY_PREFIX_CHARS]}"


def structured_key(namespace: str, payload: Mapping[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, default=str, ensure_ascii=False)
    return f"{namespace}-{normalize_text(canonical)}"


def normalize_text(text: str) -> str:
    """Lower-case and strip surrounding whitespace."""
    return text.lower().strip()
