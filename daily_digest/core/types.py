"""
Core data types for the Daily Digest pipeline.

This module defines the fundamental data structures used throughout the pipeline:
- FeedDialect: Structural schema variant of a syndication document
- RawEntry: One parsed item/entry node tagged with its feed's dialect
- Article: Normalized article record extracted from a feed entry
- FeedResult: Outcome of processing a single feed URL
- CollectStats: Counters across all feeds of a run
- PublishResult: Outcome of posting the digest to the chat webhook
- RunReport: Outcome of a full pipeline run
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
from xml.etree.ElementTree import Element


class FeedDialect(enum.Enum):
    """Syndication format governing where title/link/date live."""

    RSS2 = "rss2"
    ATOM = "atom"


@dataclass(frozen=True)
class RawEntry:
    """A parsed <item> or <entry> node.

    Every entry of one feed carries the same dialect, detected once from the
    document root.
    """

    element: Element
    dialect: FeedDialect


@dataclass(frozen=True)
class Article:
    """Normalized article record.

    Attributes:
        title: Trimmed, non-empty headline
        link: Trimmed, non-empty URL (not validated as absolute)
        published_raw: Original date string from the feed, possibly empty
    """

    title: str
    link: str
    published_raw: str = ""


@dataclass(frozen=True)
class FeedResult:
    """Outcome of fetching, parsing, extracting and filtering one feed.

    Either articles are populated (success) or error/reason are populated
    (failure), never both.

    Attributes:
        url: The feed URL
        articles: Articles that survived extraction and the recency filter
        error: Error message if the feed failed, None on success
        reason: Failure category: "transport", "http_status", "parse", "unexpected"
        status_code: HTTP status code if a response was received
        entries: Number of raw entries found in the document
        discarded: Entries dropped for a missing title or link
        stale: Articles dropped by the recency filter
    """

    url: str
    articles: tuple[Article, ...] = ()
    error: str | None = None
    reason: str | None = None
    status_code: int | None = None
    entries: int = 0
    discarded: int = 0
    stale: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CollectStats:
    """Counters collected across all feeds of a run."""

    feeds: int = 0
    feeds_ok: int = 0
    feeds_failed: int = 0
    entries: int = 0
    discarded: int = 0
    stale: int = 0
    kept: int = 0
    capped: int = 0


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a webhook POST.

    status_code is None when the request failed before getting a response.
    """

    ok: bool
    status_code: int | None = None
    error: str | None = None


@dataclass
class RunReport:
    """Outcome of a full pipeline run.

    Attributes:
        status: Terminal stage reached (e.g. "published", "no_articles")
        reason: Human-readable explanation when the run ended early
        sources: Feed URLs the run started with
        feeds: Per-feed results in source-list order
        articles: Final capped article batch
        digest: Markdown digest, if summarization succeeded
        publish: Webhook outcome, if publishing was attempted
    """

    status: str
    reason: str | None = None
    sources: list[str] = field(default_factory=list)
    feeds: list[FeedResult] = field(default_factory=list)
    articles: list[Article] = field(default_factory=list)
    digest: str | None = None
    publish: PublishResult | None = None
