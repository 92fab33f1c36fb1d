# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider keys, model names, cache behaviour,
collaborator endpoints and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from petassist.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === AI PROVIDER ===
    llm_provider: str = "google"
    gemini_api_key: str = ""
    gemini_vision_model: str = "gemini-1.5-flash"
    gemini_text_model: str = "gemini-1.5-pro"

    # === Response cache ===
    cache_ttl_seconds: float = 300.0
    gateway_single_flight: bool = True

    # === Geocoding ===
    google_maps_api_key: str = ""
    geocoding_url: str = "https://maps.googleapis.com/maps/api/geocode/json"

    # === Adoption directory ===
    petfinder_api_key: str = ""
    petfinder_secret: str = ""
    petfinder_base_url: str = "https://api.petfinder.com/v2"
    adoption_search_distance: int = 50
    adoption_search_limit: int = 20

    # === Record store ===
    record_store: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_key: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: float) -> float:  # noqa: N805
        if v < 0:
            raise ValueError("cache_ttl_seconds must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.record_store == "supabase" and not (
            self.supabase_url and self.supabase_key
        ):
            errors.append(
                "RECORD_STORE=supabase requires SUPABASE_URL and SUPABASE_KEY"
            )

        if bool(self.petfinder_api_key) != bool(self.petfinder_secret):
            errors.append(
                "PETFINDER_API_KEY and PETFINDER_SECRET must be set together"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]


def require_gemini_key(settings: Settings) -> str:
    """Return the Gemini API key or fail startup.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is not set.
    """
    if not settings.gemini_api_key.strip():
        raise ConfigurationError(
            "Missing Gemini API key. Please add GEMINI_API_KEY to your .env file."
        )
    return settings.gemini_api_key
