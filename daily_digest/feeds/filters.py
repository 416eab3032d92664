"""Recency filtering and volume capping for extracted articles."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from dateutil.parser import parse as parse_date

from ..core.types import Article

# Common timezone abbreviations seen in RFC 822 feed dates
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "UT": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
    "CET": timezone(timedelta(hours=1)),
    "CEST": timezone(timedelta(hours=2)),
    "JST": timezone(timedelta(hours=9)),
    "KST": timezone(timedelta(hours=9)),
}


def parse_published(raw: str) -> datetime | None:
    """Parse a feed date string into a timezone-aware datetime.

    Naive results are assumed to be UTC; the result is normalized to UTC.
    Returns None for empty or unparsable input, including out-of-range
    UTC offsets.
    """
    if not raw or not raw.strip():
        return None
    try:
        dt = parse_date(raw, tzinfos=TZINFOS)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # offsets outside +-24h are only rejected once the offset is read
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def cutoff_for(now: datetime, lookback_hours: float) -> datetime:
    """Return the oldest instant still considered recent."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - timedelta(hours=lookback_hours)


def is_recent(article: Article, cutoff: datetime) -> bool:
    """Decide inclusion for one article.

    Articles whose date cannot be parsed are kept (fail-open); otherwise the
    date must be strictly after the cutoff.
    """
    published = parse_published(article.published_raw)
    if published is None:
        return True
    return published > cutoff


def filter_recent(
    articles: Iterable[Article], cutoff: datetime
) -> tuple[tuple[Article, ...], int]:
    """Keep recent articles in order.

    Returns:
        Tuple of (kept articles, number of stale articles dropped)
    """
    kept: list[Article] = []
    stale = 0
    for article in articles:
        if is_recent(article, cutoff):
            kept.append(article)
        else:
            stale += 1
    return tuple(kept), stale


def cap_articles(articles: list[Article], max_articles: int) -> list[Article]:
    """Truncate to the first max_articles, preserving order."""
    if len(articles) > max_articles:
        return list(articles[:max_articles])
    return list(articles)
