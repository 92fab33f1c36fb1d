# src/llm/base_client.py — v1
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from petassist.llm.models import Attachment, LLMResponse


class BaseLLMClient(ABC):
    """Unified interface for generative model providers."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str,
        attachment: Attachment | None = None,
    ) -> LLMResponse:
        """Single completion for a prompt, with an optional inline attachment."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, ...)."""
