"""
Feed fetching.

This package handles HTTP fetching of syndication documents.
"""

from .fetcher import FetchResult, fetch_feed

__all__ = [
    "FetchResult",
    "fetch_feed",
]
