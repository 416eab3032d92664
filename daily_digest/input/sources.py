"""
Feed source list loading.

The source list is an ordered sequence of feed URLs. It can come from a
local file, a CSV export URL (such as a published spreadsheet), or inline
configuration. Blank cells and values that do not look like HTTP URLs are
dropped; order is preserved.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Iterable

import httpx
import yaml

from ..config import FetchConfig, SourcesConfig
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def is_valid_source(value: Any) -> bool:
    """Accept only non-empty strings starting with ``http``."""
    return isinstance(value, str) and value.strip().startswith("http")


def clean_sources(values: Iterable[Any]) -> list[str]:
    """Trim values and keep valid URLs in their original order."""
    urls: list[str] = []
    for value in values:
        if not is_valid_source(value):
            if value not in (None, ""):
                logger.debug("Skipping invalid source value: %r", value)
            continue
        urls.append(value.strip())
    return urls


def parse_csv_sources(text: str) -> list[str]:
    """Read the first column of each CSV row."""
    reader = csv.reader(io.StringIO(text))
    return clean_sources(row[0] for row in reader if row)


def load_sources_file(path: Path) -> list[str]:
    """Load feed URLs from a .csv, .yaml/.yml, or plain text file.

    Plain text files hold one URL per line; lines starting with ``#`` are
    comments. YAML files hold either a list or a mapping with a
    ``sources`` list.

    Raises:
        ConfigurationError: If the file does not exist or has the wrong shape
    """
    if not path.is_file():
        raise ConfigurationError(f"Source list not found: {path}")

    text = path.read_text(encoding="utf-8-sig")
    suffix = path.suffix.lower()

    if suffix == ".csv":
        return parse_csv_sources(text)

    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or []
        if isinstance(data, dict):
            data = data.get("sources") or []
        if not isinstance(data, list):
            raise ConfigurationError(f"Source list must be a YAML list: {path}")
        return clean_sources(data)

    lines = (line.strip() for line in text.splitlines())
    return clean_sources(line for line in lines if not line.startswith("#"))


def fetch_csv_sources(url: str, fetch_cfg: FetchConfig) -> list[str]:
    """Download a CSV export and read its first column.

    Raises:
        ConfigurationError: If the export cannot be downloaded
    """
    try:
        with httpx.Client(
            timeout=fetch_cfg.timeout_seconds,
            headers={"User-Agent": fetch_cfg.user_agent},
            follow_redirects=True,
            trust_env=fetch_cfg.trust_env,
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise ConfigurationError(
            f"Could not download source list: {type(exc).__name__}"
        ) from exc
    return parse_csv_sources(resp.text)


def load_sources(
    cfg: SourcesConfig,
    fetch_cfg: FetchConfig,
    path: Path | None = None,
) -> list[str]:
    """Resolve the feed URL list for one run.

    Precedence: explicit path argument, ``sources.path``, ``sources.csv_url``,
    then the inline ``sources.urls`` list.
    """
    source_path = path or (Path(cfg.path) if cfg.path else None)
    if source_path is not None:
        return load_sources_file(source_path)
    if cfg.csv_url:
        return fetch_csv_sources(cfg.csv_url, fetch_cfg)
    return clean_sources(cfg.urls)
