# tests/unit/llm/test_llm_clients.py — v1
"""Tests for llm/ — models, BaseLLMClient, GoogleAdapter, client factory."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from petassist.config.settings import Settings
from petassist.core.errors import ConfigurationError
from petassist.llm.adapters.google_adapter import GoogleAdapter
from petassist.llm.base_client import BaseLLMClient
from petassist.llm.client_factory import (
    UnsupportedProviderError,
    _PROVIDER_REGISTRY,
    create_llm_client,
    register_provider,
)
from petassist.llm.models import Attachment, LLMResponse


class TestAttachment:
    def test_decoded(self):
        a = Attachment(mime_type="image/png", data=base64.b64encode(b"png").decode())
        assert a.decoded() == b"png"

    def test_invalid_base64(self):
        with pytest.raises(ValueError):
            Attachment(mime_type="image/png", data="***").decoded()


class TestBaseLLMClient:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLLMClient()  # type: ignore[abstract]

    def test_has_required_methods(self):
        assert hasattr(BaseLLMClient, "generate")
        assert hasattr(BaseLLMClient, "provider_name")


def _fake_genai_response(text: str = "A calm, healthy cat.") -> SimpleNamespace:
    return SimpleNamespace(
        text=text,
        usage_metadata=SimpleNamespace(prompt_token_count=12, candidates_token_count=7),
    )


class TestGoogleAdapter:
    @pytest.mark.asyncio
    async def test_text_only(self):
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=_fake_genai_response())
        with patch("google.generativeai.configure") as configure, patch(
            "google.generativeai.GenerativeModel", return_value=model
        ) as model_cls:
            adapter = GoogleAdapter(api_key="k")
            resp = await adapter.generate("Describe", model="gemini-1.5-pro")

        configure.assert_called_once_with(api_key="k")
        model_cls.assert_called_once_with("gemini-1.5-pro")
        model.generate_content_async.assert_awaited_once_with(["Describe"])
        assert isinstance(resp, LLMResponse)
        assert resp.content == "A calm, healthy cat."
        assert resp.input_tokens == 12
        assert resp.output_tokens == 7
        assert resp.provider == "google"

    @pytest.mark.asyncio
    async def test_attachment_sent_as_inline_data(self):
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=_fake_genai_response())
        attachment = Attachment(mime_type="image/jpeg", data=base64.b64encode(b"jpg").decode())
        with patch("google.generativeai.configure"), patch(
            "google.generativeai.GenerativeModel", return_value=model
        ):
            await GoogleAdapter(api_key="k").generate(
                "Analyze", model="gemini-1.5-flash", attachment=attachment
            )

        parts = model.generate_content_async.await_args.args[0]
        assert parts[0] == "Analyze"
        assert parts[1] == {"inline_data": {"mime_type": "image/jpeg", "data": b"jpg"}}

    @pytest.mark.asyncio
    async def test_configures_once(self):
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=_fake_genai_response())
        with patch("google.generativeai.configure") as configure, patch(
            "google.generativeai.GenerativeModel", return_value=model
        ):
            adapter = GoogleAdapter(api_key="k")
            await adapter.generate("a", model="m")
            await adapter.generate("b", model="m")
        assert configure.call_count == 1

    @pytest.mark.asyncio
    async def test_sdk_error_propagates(self):
        model = MagicMock()
        model.generate_content_async = AsyncMock(side_effect=RuntimeError("429"))
        with patch("google.generativeai.configure"), patch(
            "google.generativeai.GenerativeModel", return_value=model
        ):
            with pytest.raises(RuntimeError):
                await GoogleAdapter(api_key="k").generate("a", model="m")

    def test_provider_name(self):
        assert GoogleAdapter(api_key="k").provider_name == "google"


class TestClientFactory:
    def test_google(self):
        s = Settings(_env_file=None, gemini_api_key="abc")  # type: ignore[call-arg]
        client = create_llm_client(s)
        assert isinstance(client, GoogleAdapter)

    def test_missing_key(self):
        s = Settings(_env_file=None, gemini_api_key="")  # type: ignore[call-arg]
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            create_llm_client(s)

    def test_unknown_provider(self):
        s = Settings(_env_file=None, llm_provider="mystery")  # type: ignore[call-arg]
        with pytest.raises(UnsupportedProviderError):
            create_llm_client(s)

    def test_register_provider(self):
        register_provider(
            "google-alt", "petassist.llm.adapters.google_adapter.GoogleAdapter"
        )
        try:
            s = Settings(_env_file=None, llm_provider="google-alt")  # type: ignore[call-arg]
            client = create_llm_client(s, api_key="x")
            assert isinstance(client, GoogleAdapter)
        finally:
            _PROVIDER_REGISTRY.pop("google-alt", None)
