"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FeedConfig: Recency window and article cap
- FetchConfig: HTTP feed fetching settings
- SourcesConfig: Where the feed URL list comes from
- ProviderConfig: LLM provider settings
- PublishConfig: Chat webhook settings
- DigestConfig: Digest rendering settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging
import os
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class FeedConfig:
    """Configuration for feed filtering.

    Attributes:
        lookback_hours: Articles published before now minus this many hours are dropped
        max_articles: Maximum number of articles handed to the summarizer
    """

    lookback_hours: float = 24
    max_articles: int = 15


@dataclass
class FetchConfig:
    """Configuration for HTTP feed fetching.

    Attributes:
        timeout_seconds: HTTP request timeout for a single feed
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 15.0
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (compatible; daily-digest/0.1; +https://github.com/)"
    )


@dataclass
class SourcesConfig:
    """Configuration for the feed source list.

    Attributes:
        path: Local file with feed URLs (.csv, .yaml/.yml, or one URL per line)
        csv_url: URL of a CSV export (e.g. a published spreadsheet)
        urls: Inline list of feed URLs
    """

    path: str | None = None
    csv_url: str | None = None
    urls: list[str] = field(default_factory=list)


@dataclass
class ProviderConfig:
    """Configuration for LLM provider.

    Attributes:
        name: Provider name ("gemini" currently supported)
        model: Model identifier
        google_api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Timeout for a single generation request
        temperature: Sampling temperature
        max_output_tokens: Upper bound on generated tokens
    """

    name: str = "gemini"
    model: str = "gemini-2.5-flash"
    google_api_key_env: str = "GOOGLE_API_KEY"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    trust_env: bool = True
    timeout_seconds: float = 60.0
    temperature: float = 0.4
    max_output_tokens: int = 4096


@dataclass
class PublishConfig:
    """Configuration for publishing the digest to a chat webhook.

    Attributes:
        enabled: Whether to publish at all
        webhook_url: Inline webhook endpoint (overrides env var)
        webhook_url_env: Environment variable name containing the webhook endpoint
        timeout_seconds: HTTP request timeout for the POST
    """

    enabled: bool = True
    webhook_url: str | None = None
    webhook_url_env: str = "DIGEST_WEBHOOK_URL"
    timeout_seconds: float = 10.0


@dataclass
class DigestConfig:
    """Configuration for the rendered digest.

    Attributes:
        timezone: IANA timezone used for the date in the digest heading
    """

    timezone: str = "Asia/Tokyo"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"
    directory: str = "logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    feeds: FeedConfig = field(default_factory=FeedConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS: dict[str, type] = {
    "feeds": FeedConfig,
    "fetch": FetchConfig,
    "sources": SourcesConfig,
    "provider": ProviderConfig,
    "publish": PublishConfig,
    "digest": DigestConfig,
    "logging": LoggingConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            logger.warning("Ignoring unknown config section: %s", key)
            continue
        if not isinstance(value, dict):
            raise ConfigurationError(f"Config section '{key}' must be a mapping")
        for sub_key, sub_value in value.items():
            if sub_key not in data[key]:
                logger.warning("Ignoring unknown config key: %s.%s", key, sub_key)
                continue
            data[key][sub_key] = sub_value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})


def validate_config(cfg: AppConfig) -> None:
    """Reject option values the pipeline cannot run with."""
    if cfg.feeds.lookback_hours <= 0:
        raise ConfigurationError("feeds.lookback_hours must be positive")
    if cfg.feeds.max_articles < 1:
        raise ConfigurationError("feeds.max_articles must be at least 1")
    if cfg.fetch.timeout_seconds <= 0:
        raise ConfigurationError("fetch.timeout_seconds must be positive")
    try:
        ZoneInfo(cfg.digest.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown digest.timezone: {cfg.digest.timezone}") from exc


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.google_api_key_env)


def get_webhook_url(cfg: PublishConfig) -> str | None:
    """Get webhook endpoint from inline config or environment variable."""
    if cfg.webhook_url:
        return cfg.webhook_url
    return os.getenv(cfg.webhook_url_env)
