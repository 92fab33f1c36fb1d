# tests/unit/gateway/test_ai_gateway.py — v1
"""Tests for gateway/ai_gateway.py — caching, single-flight, failures."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from petassist.core.errors import (
    AnalysisFailedError,
    InvalidAttachmentError,
    InvalidRequestError,
    MissingFieldError,
)
from petassist.gateway.ai_gateway import AIGateway
from petassist.gateway.models import (
    AudioRequest,
    MediaRequest,
    StructuredRequest,
    TextRequest,
    media_from_data_url,
)
from petassist.logging.context import get_context, request_context
from petassist.prompts.templates import TemplateId


def _blocking_client(response, release: asyncio.Event) -> AsyncMock:
    async def slow_generate(prompt, model, attachment=None):
        await release.wait()
        return response

    client = AsyncMock()
    client.generate = AsyncMock(side_effect=slow_generate)
    client.provider_name = "mock"
    return client


class TestCaching:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self, gateway, mock_llm_client):
        req = TextRequest(payload="limping and not eating")
        first = await gateway.invoke(TemplateId.SYMPTOMS, req)
        second = await gateway.invoke(TemplateId.SYMPTOMS, req)
        assert first == second
        assert mock_llm_client.generate.await_count == 1
        assert gateway.call_logger.cache_hits == 1
        assert gateway.call_logger.external_calls == 1

    @pytest.mark.asyncio
    async def test_normalized_text_shares_entry(self, gateway, mock_llm_client):
        await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="Limping "))
        await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="limping"))
        assert mock_llm_client.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_features_do_not_share_entries(self, gateway, mock_llm_client):
        await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="barking"))
        await gateway.invoke(TemplateId.BEHAVIOR, TextRequest(payload="barking"))
        assert mock_llm_client.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self, gateway, mock_llm_client, clock):
        req = TextRequest(payload="coughing")
        await gateway.invoke(TemplateId.SYMPTOMS, req)
        clock.advance(301)
        await gateway.invoke(TemplateId.SYMPTOMS, req)
        assert mock_llm_client.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_entry_at_exact_ttl_still_served(self, gateway, mock_llm_client, clock):
        req = TextRequest(payload="coughing")
        await gateway.invoke(TemplateId.SYMPTOMS, req)
        clock.advance(300)
        await gateway.invoke(TemplateId.SYMPTOMS, req)
        assert mock_llm_client.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_structured_requests_cached_by_content(self, gateway, mock_llm_client):
        a = StructuredRequest(payload={"ingredients": ["Oats", "pumpkin"]})
        b = StructuredRequest(payload={"ingredients": ["oats", "pumpkin"]})
        await gateway.invoke(TemplateId.RECIPE, a)
        await gateway.invoke(TemplateId.RECIPE, b)
        assert mock_llm_client.generate.await_count == 1


class TestModelRouting:
    @pytest.mark.asyncio
    async def test_media_uses_vision_model(self, gateway, mock_llm_client, photo_data_url):
        await gateway.invoke(TemplateId.MEDIA, media_from_data_url(photo_data_url))
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["model"] == "gemini-1.5-flash"
        assert kwargs["attachment"].mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_text_uses_text_model(self, gateway, mock_llm_client):
        await gateway.invoke(TemplateId.FIRST_AID, TextRequest(payload="bee sting"))
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["model"] == "gemini-1.5-pro"
        assert kwargs["attachment"] is None

    @pytest.mark.asyncio
    async def test_audio_attachment(self, gateway, mock_llm_client, audio_data_url):
        await gateway.invoke(TemplateId.AUDIO, AudioRequest(payload=audio_data_url))
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["attachment"].mime_type == "audio/wav"

    @pytest.mark.asyncio
    async def test_from_settings_models(self, settings, mock_llm_client, cache):
        s = settings.model_copy(update={"gemini_text_model": "gemini-custom"})
        gw = AIGateway.from_settings(s, mock_llm_client, cache)
        await gw.invoke(TemplateId.SYMPTOMS, TextRequest(payload="x"))
        assert mock_llm_client.generate.call_args.kwargs["model"] == "gemini-custom"


class TestValidation:
    @pytest.mark.asyncio
    async def test_malformed_attachment_rejected_before_network(self, gateway, mock_llm_client):
        with pytest.raises(InvalidAttachmentError):
            await gateway.invoke(TemplateId.MEDIA, MediaRequest(payload="not-a-data-url"))
        mock_llm_client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_base64_body_rejected_before_network(self, gateway, mock_llm_client):
        req = MediaRequest(payload="data:image/jpeg;base64,@@@not-base64@@@")
        with pytest.raises(InvalidAttachmentError):
            await gateway.invoke(TemplateId.MEDIA, req)
        mock_llm_client.generate.assert_not_awaited()
        assert gateway.call_logger.external_calls == 0
        assert gateway.call_logger.stats().failures == 0

    @pytest.mark.asyncio
    async def test_kind_mismatch(self, gateway, mock_llm_client):
        with pytest.raises(InvalidRequestError):
            await gateway.invoke(TemplateId.SYMPTOMS, StructuredRequest(payload={"text": "x"}))
        mock_llm_client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self, gateway, mock_llm_client):
        with pytest.raises(MissingFieldError):
            await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="   "))
        mock_llm_client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_template(self, gateway):
        with pytest.raises(KeyError):
            await gateway.invoke("grooming", TextRequest(payload="x"))

    @pytest.mark.asyncio
    async def test_request_context_restored_after_invoke(self, gateway):
        with request_context("caller", request_id="rid-1"):
            await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="itching"))
            ctx = get_context()
        assert (ctx.feature, ctx.request_id) == ("caller", "rid-1")


class TestFailures:
    @pytest.mark.asyncio
    async def test_provider_error_becomes_analysis_failed(self, gateway, mock_llm_client):
        mock_llm_client.generate.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(AnalysisFailedError) as exc_info:
            await gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload="vomiting"))
        assert exc_info.value.feature == "symptoms"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert str(exc_info.value) == "Failed to analyze, please try again."

    @pytest.mark.asyncio
    async def test_failure_not_cached(self, gateway, mock_llm_client, mock_llm_response):
        req = TextRequest(payload="vomiting")
        mock_llm_client.generate.side_effect = [RuntimeError("boom"), mock_llm_response]
        with pytest.raises(AnalysisFailedError):
            await gateway.invoke(TemplateId.SYMPTOMS, req)
        result = await gateway.invoke(TemplateId.SYMPTOMS, req)
        assert result == mock_llm_response.content
        assert mock_llm_client.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_recorded(self, gateway, mock_llm_client):
        mock_llm_client.generate.side_effect = RuntimeError("boom")
        with pytest.raises(AnalysisFailedError):
            await gateway.invoke(TemplateId.BEHAVIOR, TextRequest(payload="chewing"))
        stats = gateway.call_logger.stats()
        assert stats.failures == 1
        assert stats.external_calls == 1


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_concurrent_identical_requests_share_one_call(
        self, cache, mock_llm_response
    ):
        release = asyncio.Event()
        client = _blocking_client(mock_llm_response, release)
        gw = AIGateway(client, cache, single_flight=True)
        req = TextRequest(payload="sneezing")

        tasks = [asyncio.create_task(gw.invoke(TemplateId.SYMPTOMS, req)) for _ in range(3)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert results == [mock_llm_response.content] * 3
        assert client.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_disabled_calls_per_request(self, cache, mock_llm_response):
        release = asyncio.Event()
        client = _blocking_client(mock_llm_response, release)
        gw = AIGateway(client, cache, single_flight=False)
        req = TextRequest(payload="sneezing")

        tasks = [asyncio.create_task(gw.invoke(TemplateId.SYMPTOMS, req)) for _ in range(2)]
        await asyncio.sleep(0)
        release.set()
        await asyncio.gather(*tasks)

        assert client.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_shared_call(
        self, cache, mock_llm_response
    ):
        release = asyncio.Event()
        client = _blocking_client(mock_llm_response, release)
        gw = AIGateway(client, cache)
        req = TextRequest(payload="shaking")

        first = asyncio.create_task(gw.invoke(TemplateId.SYMPTOMS, req))
        second = asyncio.create_task(gw.invoke(TemplateId.SYMPTOMS, req))
        await asyncio.sleep(0)
        first.cancel()
        release.set()

        assert await second == mock_llm_response.content
        with pytest.raises(asyncio.CancelledError):
            await first
        assert client.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_shared_failure_reaches_every_waiter(self, cache):
        release = asyncio.Event()

        async def failing(prompt, model, attachment=None):
            await release.wait()
            raise RuntimeError("down")

        client = AsyncMock()
        client.generate = AsyncMock(side_effect=failing)
        gw = AIGateway(client, cache)
        req = TextRequest(payload="panting")

        tasks = [asyncio.create_task(gw.invoke(TemplateId.SYMPTOMS, req)) for _ in range(2)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert all(isinstance(r, AnalysisFailedError) for r in results)
        assert client.generate.await_count == 1


class TestBinaryFingerprint:
    @pytest.mark.asyncio
    async def test_shared_prefix_shares_cache_entry(self, gateway, mock_llm_client):
        prefix = "A" * 100
        first = MediaRequest(payload=f"data:image/jpeg;base64,{prefix}BBBB")
        second = MediaRequest(payload=f"data:image/jpeg;base64,{prefix}CCCC")
        await gateway.invoke(TemplateId.MEDIA, first)
        await gateway.invoke(TemplateId.MEDIA, second)
        assert mock_llm_client.generate.await_count == 1
