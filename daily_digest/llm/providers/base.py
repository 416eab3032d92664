"""Abstract interface for digest summarization."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ...core.types import Article


class SummaryProvider(ABC):
    """Provider interface turning an article batch into a Markdown digest."""

    @abstractmethod
    def summarize(self, articles: list[Article], today: date) -> str:
        """Return the digest Markdown.

        Raises:
            UpstreamResponseError: If the provider fails or returns no text
        """
        raise NotImplementedError
