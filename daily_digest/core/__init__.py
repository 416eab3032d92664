"""
Core domain models.

This package contains data types that are independent of any
specific pipeline stage.
"""

from .types import (
    Article,
    CollectStats,
    FeedDialect,
    FeedResult,
    PublishResult,
    RawEntry,
    RunReport,
)

__all__ = [
    "Article",
    "CollectStats",
    "FeedDialect",
    "FeedResult",
    "PublishResult",
    "RawEntry",
    "RunReport",
]
