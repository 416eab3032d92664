"""Provider factory and registry for LLM backends."""

from __future__ import annotations

import logging

from ...config import ProviderConfig, get_api_key
from ...errors import ConfigurationError
from .base import SummaryProvider
from .gemini import GeminiProvider


ProviderBuilder = type[SummaryProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
    "google": GeminiProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(
    provider_cfg: ProviderConfig,
    logger: logging.Logger | None = None,
) -> SummaryProvider:
    """Build a provider instance from runtime config.

    Raises:
        ConfigurationError: If the provider is unknown or its API key is missing
    """
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ConfigurationError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    return builder(provider_cfg, api_key, logger)
