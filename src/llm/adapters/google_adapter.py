# src/llm/adapters/google_adapter.py — v1
"""Google Gemini adapter implementing BaseLLMClient.

Uses the google-generativeai SDK. Attachments are sent as inline data
parts after the prompt text.
"""

from __future__ import annotations

import time
from typing import Any

from petassist.llm.base_client import BaseLLMClient
from petassist.llm.models import Attachment, LLMResponse


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(self, api_key: str = "", **kwargs: Any) -> None:
        self._api_key = api_key
        self._configured = False

    def _configure(self) -> None:
        import google.generativeai as genai

        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True

    async def generate(
        self,
        prompt: str,
        model: str,
        attachment: Attachment | None = None,
    ) -> LLMResponse:
        import google.generativeai as genai

        self._configure()
        gen_model = genai.GenerativeModel(model)

        parts: list[Any] = [prompt]
        if attachment is not None:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": attachment.mime_type,
                        "data": attachment.decoded(),
                    }
                }
            )

        t0 = time.monotonic()
        resp = await gen_model.generate_content_async(parts)
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            content=resp.text or "",
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            model=model,
            provider="google",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "google"
