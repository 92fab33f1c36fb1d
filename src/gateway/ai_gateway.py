# src/gateway/ai_gateway.py — v1
"""AI gateway: cached, single-attempt calls to the generative model.

Flow per invocation:
  1. Check the request kind against the template and derive the cache key
     (binary requests validate their data URL here, before any network).
  2. Cache hit: return the stored text, no model call.
  3. Miss: build the prompt, await one model call (no retry, no timeout),
     store the text, return it.
  4. Provider failure: log the provider error, raise AnalysisFailedError.

With single-flight enabled, concurrent callers for the same key await one
shared call instead of each calling the model.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from petassist.core.errors import AnalysisFailedError, InvalidRequestError
from petassist.logging.context import request_context
from petassist.prompts.builder import build
from petassist.prompts.templates import PromptTemplate, TemplateId, get_template
from petassist.tracking.call_logger import CallLogger

if TYPE_CHECKING:
    from petassist.cache.base_cache_store import BaseCacheStore
    from petassist.config.settings import Settings
    from petassist.gateway.models import AnalysisRequest
    from petassist.llm.base_client import BaseLLMClient
    from petassist.llm.models import Attachment

logger = logging.getLogger(__name__)


class AIGateway:
    """Routes analysis requests through the response cache to the model."""

    def __init__(
        self,
        client: BaseLLMClient,
        cache: BaseCacheStore,
        vision_model: str = "gemini-1.5-flash",
        text_model: str = "gemini-1.5-pro",
        single_flight: bool = True,
        call_logger: CallLogger | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._models = {"vision": vision_model, "text": text_model}
        self._single_flight = single_flight
        self._calls = call_logger or CallLogger()
        self._inflight: dict[str, asyncio.Task[str]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: BaseLLMClient,
        cache: BaseCacheStore,
        call_logger: CallLogger | None = None,
    ) -> AIGateway:
        return cls(
            client,
            cache,
            vision_model=settings.gemini_vision_model,
            text_model=settings.gemini_text_model,
            single_flight=settings.gateway_single_flight,
            call_logger=call_logger,
        )

    @property
    def call_logger(self) -> CallLogger:
        return self._calls

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    async def invoke(self, template_id: TemplateId | str, request: AnalysisRequest) -> str:
        """Return the model's text for a request, from cache when fresh.

        Raises:
            InvalidRequestError: Request kind does not fit the template.
            InvalidAttachmentError: Data URL is malformed or not base64.
            MissingFieldError: A required prompt input is blank.
            AnalysisFailedError: The model call failed.
        """
        template = get_template(template_id)
        with request_context(template.id.value):
            return await self._invoke(template, request)

    async def _invoke(self, template: PromptTemplate, request: AnalysisRequest) -> str:
        feature = template.id.value
        if request.kind != template.kind:
            raise InvalidRequestError(
                f"Template {feature!r} expects a {template.kind} request, got {request.kind}"
            )

        key = request.cache_key(template.namespace)
        attachment = request.attachment()

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", feature)
            self._calls.record_cache_hit(feature)
            return cached

        prompt = build(template.id, request.prompt_inputs())

        if not self._single_flight:
            return await self._fetch(template, key, prompt, attachment)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(template, key, prompt, attachment))
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._inflight.pop(k, None))
        else:
            logger.debug("Joining in-flight call for %s", feature)
        # A cancelled waiter must not cancel the call other waiters share.
        return await asyncio.shield(task)

    async def _fetch(
        self,
        template: PromptTemplate,
        key: str,
        prompt: str,
        attachment: Attachment | None,
    ) -> str:
        feature = template.id.value
        model = self._models[template.model_tier]
        t0 = time.monotonic()
        try:
            response = await self._client.generate(prompt, model=model, attachment=attachment)
        except Exception as e:
            latency = int((time.monotonic() - t0) * 1000)
            logger.error("Error analyzing %s: %s", feature, e, exc_info=True)
            self._calls.record_failure(feature, model, e, latency_ms=latency)
            raise AnalysisFailedError(feature) from e

        self._calls.record_success(feature, response)
        self._cache.put(key, response.content)
        logger.info(
            "Analyzed %s with %s in %dms", feature, response.model, response.latency_ms
        )
        return response.content
