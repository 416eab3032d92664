"""Input loading for the feed source list."""

from .sources import clean_sources, is_valid_source, load_sources, load_sources_file

__all__ = ["clean_sources", "is_valid_source", "load_sources", "load_sources_file"]
