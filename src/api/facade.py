# src/api/facade.py — v1
"""Public API facade — one async method per assistant feature.

Usage:
    from petassist.api.facade import build_assistant
    assistant = build_assistant()
    text = await assistant.analyze_symptoms("limping and not eating")

``build_assistant`` owns the application context: it creates a fresh
response cache, the LLM client, the gateway and the optional collaborators.
Two assistants never share cache entries.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from petassist.api.models import GrowthData, MemorialInfo, TreatRequest
from petassist.cache.cache_factory import create_cache_store
from petassist.config.settings import Settings, load_settings
from petassist.core.errors import ConfigurationError, InputValidationError
from petassist.gateway.ai_gateway import AIGateway
from petassist.gateway.models import (
    AudioRequest,
    StructuredRequest,
    TextRequest,
    media_from_data_url,
)
from petassist.health.form import create_health_wizard
from petassist.health.models import HealthAnalysis, HealthFormData
from petassist.health.parser import parse_health_analysis
from petassist.health.submission import HealthAssessmentSubmitter, HealthSubmissionResult
from petassist.llm.base_client import BaseLLMClient
from petassist.llm.client_factory import create_llm_client
from petassist.prompts.templates import TemplateId
from petassist.services.geocoder import BaseGeocoder, GoogleGeocoder
from petassist.services.models import LocationInsight, Organization
from petassist.services.petfinder import PetfinderClient
from petassist.storage.base_record_store import BaseRecordStore
from petassist.storage.memory_store import MemoryRecordStore
from petassist.storage.store_factory import create_record_store
from petassist.wizard.controller import WizardController

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class PetAssistant:
    """Feature entry points over the AI gateway and the collaborators."""

    def __init__(
        self,
        gateway: AIGateway,
        geocoder: BaseGeocoder | None = None,
        directory: PetfinderClient | None = None,
        record_store: BaseRecordStore | None = None,
        search_distance: int = 50,
        search_limit: int = 20,
    ) -> None:
        self._gateway = gateway
        self._geocoder = geocoder
        self._directory = directory
        self._store = record_store or MemoryRecordStore()
        self._search_distance = search_distance
        self._search_limit = search_limit

    @property
    def gateway(self) -> AIGateway:
        return self._gateway

    @property
    def record_store(self) -> BaseRecordStore:
        return self._store

    # --- Media ---

    async def analyze_media(self, data_url: str, is_video: bool = False) -> str:
        """Emotional, physical and environmental read of a pet photo or video."""
        return await self._gateway.invoke(
            TemplateId.MEDIA, media_from_data_url(data_url, is_video=is_video)
        )

    async def analyze_audio(self, data_url: str) -> str:
        """Vocalization analysis of a recording."""
        return await self._gateway.invoke(TemplateId.AUDIO, AudioRequest(payload=data_url))

    async def analyze_plant(self, data_url: str) -> str:
        """Plant identification and pet toxicity from a photo."""
        return await self._gateway.invoke(TemplateId.PLANT, media_from_data_url(data_url))

    # --- Free text ---

    async def analyze_symptoms(self, symptoms: str) -> str:
        return await self._gateway.invoke(TemplateId.SYMPTOMS, TextRequest(payload=symptoms))

    async def first_aid(self, emergency: str) -> str:
        return await self._gateway.invoke(TemplateId.FIRST_AID, TextRequest(payload=emergency))

    async def analyze_behavior(self, behavior: str) -> str:
        return await self._gateway.invoke(TemplateId.BEHAVIOR, TextRequest(payload=behavior))

    async def analyze_location(self, location: str) -> str:
        return await self._gateway.invoke(TemplateId.LOCATION, TextRequest(payload=location))

    # --- Structured ---

    async def generate_treat_recipe(self, ingredients: list[str]) -> str:
        req = _validate(TreatRequest, {"ingredients": ingredients})
        return await self._gateway.invoke(
            TemplateId.RECIPE, StructuredRequest(payload=req.model_dump())
        )

    async def generate_memorial(self, info: MemorialInfo | Mapping[str, Any]) -> str:
        data = _validate(MemorialInfo, info)
        return await self._gateway.invoke(
            TemplateId.MEMORIAL, StructuredRequest(payload=data.model_dump())
        )

    async def analyze_growth(self, growth: GrowthData | Mapping[str, Any]) -> str:
        data = _validate(GrowthData, growth)
        return await self._gateway.invoke(
            TemplateId.GROWTH, StructuredRequest(payload=data.model_dump())
        )

    async def analyze_health(self, form: HealthFormData | Mapping[str, Any]) -> HealthAnalysis:
        """Run the health assessment and split the reply into sections."""
        data = _validate(HealthFormData, form)
        text = await self._gateway.invoke(
            TemplateId.HEALTH,
            StructuredRequest(payload=data.model_dump(exclude={"photo", "photo_url"})),
        )
        return parse_health_analysis(text)

    def health_wizard(self) -> WizardController[HealthSubmissionResult]:
        """Questionnaire whose final step stores records and runs the analysis."""
        submitter = HealthAssessmentSubmitter(self._store, self.analyze_health)
        return create_health_wizard(submitter)

    # --- Collaborators ---

    async def explore_location(self, address: str) -> LocationInsight:
        """Geocode an address, then analyze the resolved place for pet owners."""
        if self._geocoder is None:
            raise ConfigurationError("GOOGLE_MAPS_API_KEY is required for location lookup")
        location = await self._geocoder.geocode(address)
        analysis = await self.analyze_location(location.address)
        return LocationInsight(location=location, analysis=analysis)

    async def find_adoption_centers(
        self,
        location: str,
        distance: int | None = None,
        limit: int | None = None,
    ) -> list[Organization]:
        if self._directory is None:
            raise ConfigurationError(
                "PETFINDER_API_KEY and PETFINDER_SECRET are required for adoption search"
            )
        return await self._directory.search_organizations(
            location,
            distance=self._search_distance if distance is None else distance,
            limit=self._search_limit if limit is None else limit,
        )


def build_assistant(
    settings: Settings | None = None,
    client: BaseLLMClient | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> PetAssistant:
    """Wire a PetAssistant from settings.

    Raises:
        ConfigurationError: If no client is given and GEMINI_API_KEY is unset.
    """
    settings = settings or load_settings()
    client = client or create_llm_client(settings)
    cache = create_cache_store(settings, clock=clock)
    gateway = AIGateway.from_settings(settings, client, cache)

    geocoder = None
    if settings.google_maps_api_key:
        geocoder = GoogleGeocoder(settings.google_maps_api_key, url=settings.geocoding_url)

    directory = None
    if settings.petfinder_api_key:
        directory = PetfinderClient(
            settings.petfinder_api_key,
            settings.petfinder_secret,
            base_url=settings.petfinder_base_url,
        )

    logger.debug(
        "Assistant ready: provider=%s, cache_ttl=%ss, store=%s",
        client.provider_name, settings.cache_ttl_seconds, settings.record_store,
    )
    return PetAssistant(
        gateway,
        geocoder=geocoder,
        directory=directory,
        record_store=create_record_store(settings),
        search_distance=settings.adoption_search_distance,
        search_limit=settings.adoption_search_limit,
    )


def _validate(model: type[M], value: M | Mapping[str, Any]) -> M:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(dict(value))
    except ValidationError as e:
        raise InputValidationError(str(e)) from e
