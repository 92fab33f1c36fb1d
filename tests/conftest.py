# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a fake LLM client, a controllable clock, settings isolated from
any local .env file, and sample data URLs. No external dependencies — all
I/O is mocked.
"""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock

import pytest

from petassist.cache.memory_store import MemoryCacheStore
from petassist.config.settings import Settings
from petassist.gateway.ai_gateway import AIGateway
from petassist.llm.models import LLMResponse


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_data_url(raw: bytes, mime: str = "image/jpeg") -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


# === FIXTURES: Settings / clock ===


@pytest.fixture
def settings() -> Settings:
    """Settings with a Gemini key, ignoring any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        gemini_api_key="test-key",
        google_maps_api_key="",
        petfinder_api_key="",
        petfinder_secret="",
        record_store="memory",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# === FIXTURES: LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock LLM response."""
    return LLMResponse(
        content="Your pet may have a sprained leg. Rest and monitor.",
        input_tokens=120,
        output_tokens=40,
        model="gemini-1.5-pro",
        provider="google",
        latency_ms=500,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.generate = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "mock"
    return client


# === FIXTURES: Cache / gateway ===


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(ttl_seconds=300, clock=clock)


@pytest.fixture
def gateway(mock_llm_client: AsyncMock, cache: MemoryCacheStore) -> AIGateway:
    return AIGateway(mock_llm_client, cache)


# === FIXTURES: Sample payloads ===


@pytest.fixture
def photo_data_url() -> str:
    return make_data_url(b"\xff\xd8\xff\xe0" + b"photo-bytes" * 20)


@pytest.fixture
def audio_data_url() -> str:
    return make_data_url(b"RIFF" + b"audio-bytes" * 20, mime="audio/wav")
