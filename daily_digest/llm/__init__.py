"""LLM summarization of the article batch into a Markdown digest."""

from .prompts import build_digest_prompt, digest_heading, format_article_list, normalize_digest
from .providers.base import SummaryProvider
from .providers.factory import available_providers, create_provider
from .providers.gemini import GeminiProvider

__all__ = [
    "SummaryProvider",
    "GeminiProvider",
    "available_providers",
    "build_digest_prompt",
    "create_provider",
    "digest_heading",
    "format_article_list",
    "normalize_digest",
]
