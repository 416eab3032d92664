"""LLM provider implementations."""

from .base import SummaryProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider

__all__ = ["SummaryProvider", "GeminiProvider", "available_providers", "create_provider"]
