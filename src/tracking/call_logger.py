# src/tracking/call_logger.py — v1
"""Gateway call logging — one record per external call or cache hit."""

from __future__ import annotations

import json
import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from petassist.llm.models import LLMResponse
from petassist.tracking.models import GatewayStats, LLMCallRecord

logger = logging.getLogger(__name__)


class CallLogger:
    """Accumulates call records for the lifetime of an assistant."""

    def __init__(self) -> None:
        self._records: list[LLMCallRecord] = []

    def record_success(self, feature: str, response: LLMResponse) -> LLMCallRecord:
        return self._append(
            feature=feature,
            status="success",
            provider=response.provider,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
        )

    def record_failure(
        self, feature: str, model: str, error: BaseException, latency_ms: int = 0
    ) -> LLMCallRecord:
        return self._append(
            feature=feature,
            status="failed",
            model=model,
            latency_ms=latency_ms,
            error=f"{type(error).__name__}: {error}",
        )

    def record_cache_hit(self, feature: str) -> LLMCallRecord:
        return self._append(feature=feature, status="cache_hit")

    def _append(self, **fields: object) -> LLMCallRecord:
        record = LLMCallRecord(
            call_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            **fields,  # type: ignore[arg-type]
        )
        self._records.append(record)
        return record

    @property
    def records(self) -> list[LLMCallRecord]:
        return list(self._records)

    @property
    def external_calls(self) -> int:
        """Calls that reached the provider, successful or not."""
        return sum(1 for r in self._records if r.status != "cache_hit")

    @property
    def cache_hits(self) -> int:
        return sum(1 for r in self._records if r.status == "cache_hit")

    def stats(self) -> GatewayStats:
        external = [r for r in self._records if r.status != "cache_hit"]
        latencies = [r.latency_ms for r in external if r.status == "success"]
        return GatewayStats(
            external_calls=len(external),
            cache_hits=self.cache_hits,
            failures=sum(1 for r in external if r.status == "failed"),
            total_tokens=sum(r.input_tokens + r.output_tokens for r in external),
            avg_latency_ms=sum(latencies) / len(latencies) if latencies else 0.0,
            calls_by_feature=dict(Counter(r.feature for r in external)),
        )

    def save(self, path: Path) -> None:
        """Save all records to a JSON Lines file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            for record in self._records:
                f.write(json.dumps(record.model_dump(), default=str) + "\n")
        logger.debug("Saved %d call records to %s", len(self._records), path)
