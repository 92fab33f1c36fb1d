# src/llm/models.py — v1
"""LLM-specific types: Attachment, LLMResponse."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel


class Attachment(BaseModel):
    """Inline binary payload sent alongside the prompt (image, video, audio)."""

    mime_type: str
    data: str  # base64 body, without the data-URL header

    def decoded(self) -> bytes:
        """Raw bytes of the payload.

        Raises:
            ValueError: If the payload is not valid base64.
        """
        try:
            return base64.b64decode(self.data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Attachment payload is not valid base64: {e}") from e


class LLMResponse(BaseModel):
    """Normalized response from any LLM provider."""

    content: str
    model: str
    provider: str
    latency_ms: int
    input_tokens: int = 0
    output_tokens: int = 0
    raw_response: Any = None
