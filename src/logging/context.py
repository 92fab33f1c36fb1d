# src/logging/context.py — v1
"""Contextual logging support — attach request_id and feature to log records."""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_feature: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "feature", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    request_id: str | None = None
    feature: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(request_id=_request_id.get(), feature=_feature.get())


def set_request_context(feature: str, request_id: str | None = None) -> str:
    """Set the context for one assistant request and return its request_id.

    Each asyncio task runs in its own copy of the context, so concurrent
    requests do not overwrite each other's values.
    """
    rid = request_id or uuid.uuid4().hex[:12]
    _request_id.set(rid)
    _feature.set(feature)
    return rid


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _feature.set(None)


@contextmanager
def request_context(feature: str, request_id: str | None = None) -> Iterator[str]:
    """Set the request context for the block, restoring the caller's after."""
    rid = request_id or uuid.uuid4().hex[:12]
    rid_token = _request_id.set(rid)
    feature_token = _feature.set(feature)
    try:
        yield rid
    finally:
        _feature.reset(feature_token)
        _request_id.reset(rid_token)
