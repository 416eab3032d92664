"""
Feed parsing, article extraction and filtering.

This package turns raw RSS 2.0 / Atom documents into normalized
Article records and applies the recency window and volume cap.
"""

from .extractor import EXTRACTION_RULES, extract_article, extract_articles
from .filters import cap_articles, cutoff_for, filter_recent, is_recent, parse_published
from .parser import ATOM_NS, DC_NS, ParsedFeed, detect_dialect, parse_feed

__all__ = [
    "ATOM_NS",
    "DC_NS",
    "EXTRACTION_RULES",
    "ParsedFeed",
    "cap_articles",
    "cutoff_for",
    "detect_dialect",
    "extract_article",
    "extract_articles",
    "filter_recent",
    "is_recent",
    "parse_feed",
    "parse_published",
]
