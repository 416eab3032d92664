"""Output stage: publishing the digest."""

from .webhook import publish_digest

__all__ = ["publish_digest"]
