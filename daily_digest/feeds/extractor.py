"""
Article extraction from dialect-tagged feed entries.

Field lookups are declared once per dialect as ordered fallback chains; the
first lookup producing a non-empty value wins. A missing node never raises,
it simply yields an empty string. Entries without a title or link are
discarded rather than defaulted.
"""

from __future__ import annotations

from typing import Callable, Iterable
from xml.etree.ElementTree import Element

from ..core.types import Article, FeedDialect, RawEntry
from .parser import ATOM_NS, DC_NS

Lookup = Callable[[Element], str]


def child_text(tag: str) -> Lookup:
    """Lookup returning the trimmed text content of the first ``tag`` child."""

    def lookup(element: Element) -> str:
        node = element.find(tag)
        if node is None:
            return ""
        return "".join(node.itertext()).strip()

    return lookup


def child_attr(tag: str, attr: str) -> Lookup:
    """Lookup returning the trimmed ``attr`` attribute of the first ``tag`` child."""

    def lookup(element: Element) -> str:
        node = element.find(tag)
        if node is None:
            return ""
        return (node.get(attr) or "").strip()

    return lookup


def _atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


# field name -> fallback chain, per dialect
EXTRACTION_RULES: dict[FeedDialect, dict[str, tuple[Lookup, ...]]] = {
    FeedDialect.RSS2: {
        "title": (child_text("title"),),
        "link": (child_text("link"),),
        "published_raw": (child_text("pubDate"), child_text(f"{{{DC_NS}}}date")),
    },
    FeedDialect.ATOM: {
        "title": (child_text(_atom("title")),),
        "link": (child_attr(_atom("link"), "href"),),
        "published_raw": (child_text(_atom("published")), child_text(_atom("updated"))),
    },
}


def resolve_field(element: Element, chain: Iterable[Lookup]) -> str:
    """Return the first non-empty value produced by a fallback chain."""
    for lookup in chain:
        value = lookup(element)
        if value:
            return value
    return ""


def extract_article(entry: RawEntry) -> Article | None:
    """Map one raw entry to an Article, or None if title or link is missing."""
    rules = EXTRACTION_RULES[entry.dialect]
    title = resolve_field(entry.element, rules["title"])
    link = resolve_field(entry.element, rules["link"])
    if not title or not link:
        return None
    return Article(
        title=title,
        link=link,
        published_raw=resolve_field(entry.element, rules["published_raw"]),
    )


def extract_articles(entries: Iterable[RawEntry]) -> tuple[tuple[Article, ...], int]:
    """Extract all entries of a feed.

    Returns:
        Tuple of (articles in document order, number of discarded entries)
    """
    articles: list[Article] = []
    discarded = 0
    for entry in entries:
        article = extract_article(entry)
        if article is None:
            discarded += 1
            continue
        articles.append(article)
    return tuple(articles), discarded
