# src/tracking/models.py — v1
"""Tracking domain models: LLMCallRecord, GatewayStats."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class LLMCallRecord(BaseModel):
    """One gateway invocation: an external model call or a cache hit."""

    call_id: str
    timestamp: datetime
    feature: str
    status: Literal["success", "failed", "cache_hit"]
    provider: str = ""
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    error: str | None = None


class GatewayStats(BaseModel):
    """Aggregated counters over all recorded invocations."""

    external_calls: int = 0
    cache_hits: int = 0
    failures: int = 0
    total_tokens: int = 0
    avg_latency_ms: float = 0.0
    calls_by_feature: dict[str, int] = {}
