# src/llm/client_factory.py — v1
"""Factory: instantiate the LLM client from the configured provider name."""

from __future__ import annotations

import importlib
import logging

from petassist.config.settings import Settings, require_gemini_key
from petassist.core.errors import ConfigurationError
from petassist.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "google": "petassist.llm.adapters.google_adapter.GoogleAdapter",
}


class UnsupportedProviderError(ConfigurationError):
    """Raised when a provider is not registered."""


def create_llm_client(settings: Settings, **kwargs: object) -> BaseLLMClient:
    """Instantiate the adapter named by ``settings.llm_provider``.

    Raises:
        UnsupportedProviderError: If the provider is not registered.
        ConfigurationError: If the Google provider has no API key.
    """
    provider = settings.llm_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    init_kwargs = dict(kwargs)
    if provider == "google":
        init_kwargs.setdefault("api_key", require_gemini_key(settings))

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])
    logger.debug("Creating LLM client: provider=%s", provider)
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom adapter implementing BaseLLMClient."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
