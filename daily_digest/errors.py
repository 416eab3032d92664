"""Exception types shared across pipeline stages."""

from __future__ import annotations


class DigestError(Exception):
    """Base class for all daily digest errors."""


class TransportError(DigestError):
    """Raised when a feed cannot be fetched or returns a non-success status.

    ``status_code`` is None for network-level failures.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(DigestError):
    """Raised when feed text is not well-formed XML."""


class ConfigurationError(DigestError, ValueError):
    """Raised when a credential, endpoint, or option is missing or invalid."""


class UpstreamResponseError(DigestError):
    """Raised when the summarization API fails or returns an unexpected shape."""
