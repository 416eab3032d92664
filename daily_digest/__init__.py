"""
Daily Digest - AI-powered tech news digest for chat channels.

This package fetches a list of RSS 2.0 / Atom feeds, keeps articles from a
recent lookback window, summarizes them into a categorized Markdown digest
with an LLM, and posts the digest to a chat webhook.

Main entry point is the CLI via `daily-digest run` command.

Example:
    $ daily-digest run -s feeds.txt
"""

__all__ = ["__version__", "Article", "FeedDialect", "collect_articles", "run_pipeline"]
__version__ = "0.1.0"

from .core.types import Article, FeedDialect
from .runner import collect_articles, run_pipeline
