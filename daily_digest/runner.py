"""
Main pipeline orchestration for the Daily Digest.

This module coordinates the entire workflow:
1. Load the feed source list
2. Fetch, parse, extract and recency-filter each feed independently
3. Merge per-feed results in source order and cap the batch
4. Summarize the batch into a Markdown digest via LLM
5. Publish the digest to the chat webhook

Each feed is processed behind its own error boundary: a failure at any
stage of one feed is logged and reported in its FeedResult, and never
stops later feeds. Stage-level failures end the run early with a status
in the returned RunReport; run_pipeline itself does not raise.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from .config import AppConfig, get_webhook_url, validate_config
from .core.types import Article, CollectStats, FeedResult, RunReport
from .errors import ConfigurationError, ParseError, TransportError, UpstreamResponseError
from .feeds.extractor import extract_articles
from .feeds.filters import cap_articles, cutoff_for, filter_recent
from .feeds.parser import parse_feed
from .fetch.fetcher import fetch_feed
from .input.sources import load_sources
from .llm.providers.base import SummaryProvider
from .llm.providers.factory import create_provider
from .output.webhook import publish_digest
from .utils.logging import log_event, redact_text, setup_logging


def _package_logger() -> logging.Logger:
    return logging.getLogger("daily_digest")


def process_feed(
    url: str,
    cfg: AppConfig,
    cutoff: datetime,
    logger: logging.Logger | None = None,
) -> FeedResult:
    """Run fetch, parse, extract and recency filter for one feed.

    This is the per-feed error boundary: every failure becomes a failed
    FeedResult with a reason instead of an exception.

    Args:
        url: Feed URL
        cfg: Application configuration
        cutoff: Oldest publication instant still considered recent
        logger: Logger for events

    Returns:
        FeedResult with surviving articles, or with error and reason set
    """
    logger = logger or _package_logger()
    status_code: int | None = None
    try:
        body, status_code = _fetch_body(url, cfg)
        parsed = parse_feed(body)
        if parsed.dialect is None:
            log_event(
                logger,
                "Unrecognized feed format",
                level=logging.WARNING,
                event="feed_unrecognized",
                url=url,
            )
            return FeedResult(url=url, status_code=status_code)

        extracted, discarded = extract_articles(parsed.entries)
        kept, stale = filter_recent(extracted, cutoff)
    except TransportError as exc:
        reason = "transport" if exc.status_code is None else "http_status"
        return _failed(logger, url, reason, str(exc), exc.status_code)
    except ParseError as exc:
        return _failed(logger, url, "parse", str(exc), status_code)
    except Exception as exc:  # noqa: BLE001
        return _failed(
            logger,
            url,
            "unexpected",
            f"{type(exc).__name__}: {exc}",
            status_code,
            exc_info=True,
        )

    log_event(
        logger,
        "Feed processed",
        level=logging.DEBUG,
        event="feed_ok",
        url=url,
        dialect=parsed.dialect.value,
        entries=len(parsed.entries),
        discarded=discarded,
        stale=stale,
        kept=len(kept),
    )
    return FeedResult(
        url=url,
        articles=kept,
        status_code=status_code,
        entries=len(parsed.entries),
        discarded=discarded,
        stale=stale,
    )


def _fetch_body(url: str, cfg: AppConfig) -> tuple[str | bytes, int]:
    """Fetch a feed and return its body, raising TransportError on failure."""
    result = fetch_feed(
        url,
        timeout=cfg.fetch.timeout_seconds,
        user_agent=cfg.fetch.user_agent,
        trust_env=cfg.fetch.trust_env,
    )
    if result.error or result.status_code is None:
        raise TransportError(result.error or "No response")
    if result.status_code != 200:
        raise TransportError(f"HTTP {result.status_code}", status_code=result.status_code)
    if result.content is not None:
        return result.content, result.status_code
    return result.text or "", result.status_code


def _failed(
    logger: logging.Logger,
    url: str,
    reason: str,
    error: str,
    status_code: int | None,
    exc_info: bool = False,
) -> FeedResult:
    log_event(
        logger,
        "Feed skipped",
        level=logging.WARNING,
        exc_info=exc_info,
        event="feed_failed",
        url=url,
        reason=reason,
        status_code=status_code,
        error=redact_text(error),
    )
    return FeedResult(url=url, error=error, reason=reason, status_code=status_code)


def collect_articles(
    urls: list[str],
    cfg: AppConfig,
    now: datetime | None = None,
    logger: logging.Logger | None = None,
    progress: Progress | None = None,
    task_id: int | None = None,
) -> tuple[list[Article], list[FeedResult], CollectStats]:
    """Process every feed in order, merge their articles and apply the cap.

    Feeds earlier in the list win when the merged batch exceeds
    ``feeds.max_articles``.

    Args:
        urls: Feed URLs in source-list order
        cfg: Application configuration
        now: Reference instant for the recency cutoff (defaults to current UTC time)
        logger: Logger for events
        progress: Optional Rich progress bar
        task_id: Task ID for progress updates

    Returns:
        Tuple of (capped article batch, per-feed results, collection statistics)
    """
    now = now or datetime.now(timezone.utc)
    cutoff = cutoff_for(now, cfg.feeds.lookback_hours)

    results: list[FeedResult] = []
    for url in urls:
        results.append(process_feed(url, cfg, cutoff, logger=logger))
        if progress is not None and task_id is not None:
            progress.advance(task_id, 1)

    merged = [article for result in results for article in result.articles]
    articles = cap_articles(merged, cfg.feeds.max_articles)
    return articles, results, _collect_stats(results, len(merged), len(articles))


def _collect_stats(results: list[FeedResult], merged: int, kept: int) -> CollectStats:
    return CollectStats(
        feeds=len(results),
        feeds_ok=sum(1 for r in results if r.ok),
        feeds_failed=sum(1 for r in results if not r.ok),
        entries=sum(r.entries for r in results),
        discarded=sum(r.discarded for r in results),
        stale=sum(r.stale for r in results),
        kept=kept,
        capped=merged - kept,
    )


def collect_with_progress(
    urls: list[str],
    cfg: AppConfig,
    console: Console,
    show_progress: bool = True,
    now: datetime | None = None,
    logger: logging.Logger | None = None,
) -> tuple[list[Article], list[FeedResult], CollectStats]:
    """collect_articles with an optional Rich progress bar over feeds."""
    if not show_progress:
        return collect_articles(urls, cfg, now=now, logger=logger)

    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console,
    )
    with progress:
        task_id = progress.add_task("Fetch feeds", total=len(urls))
        return collect_articles(
            urls, cfg, now=now, logger=logger, progress=progress, task_id=task_id
        )


def render_collect_stats(stats: CollectStats, console: Console) -> None:
    """Display collection statistics to the console."""
    console.print(
        "[bold]Fetch summary[/bold]: "
        f"feeds={stats.feeds}, ok={stats.feeds_ok}, failed={stats.feeds_failed}, "
        f"entries={stats.entries}, discarded={stats.discarded}, stale={stats.stale}, "
        f"kept={stats.kept}, capped={stats.capped}"
    )


def run_pipeline(
    cfg: AppConfig,
    sources_path: Path | None = None,
    output_dir: Path | None = None,
    publish: bool = True,
    show_progress: bool = True,
    console: Console | None = None,
    now: datetime | None = None,
    provider: SummaryProvider | None = None,
) -> RunReport:
    """Run the complete digest pipeline.

    Never raises: every failure is logged and reflected in the report status.

    Args:
        cfg: Application configuration
        sources_path: Optional source list file overriding configuration
        output_dir: Directory for the log file (when file logging is enabled)
        publish: Whether to post the digest to the webhook
        show_progress: Whether to display a progress bar while fetching
        console: Rich console for output (creates default if None)
        now: Reference instant for the recency cutoff and digest date
        provider: Pre-built summary provider (built from config if None)

    Returns:
        RunReport describing how far the run got
    """
    logger = setup_logging(cfg.logging, output_dir or Path(cfg.logging.directory))
    console = console or Console()
    try:
        return _run(cfg, sources_path, publish, show_progress, console, now, provider, logger)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Pipeline aborted by unexpected error")
        return RunReport(status="error", reason=f"{type(exc).__name__}: {redact_text(str(exc))}")


def _run(
    cfg: AppConfig,
    sources_path: Path | None,
    publish: bool,
    show_progress: bool,
    console: Console,
    now: datetime | None,
    provider: SummaryProvider | None,
    logger: logging.Logger,
) -> RunReport:
    now = now or datetime.now(timezone.utc)
    log_event(logger, "Pipeline start", event="pipeline_start")

    try:
        validate_config(cfg)
    except ConfigurationError as exc:
        return _stop(logger, "invalid_config", str(exc))

    try:
        sources = load_sources(cfg.sources, cfg.fetch, sources_path)
    except ConfigurationError as exc:
        return _stop(logger, "no_sources", str(exc))
    if not sources:
        return _stop(logger, "no_sources", "Source list is empty")

    articles, feeds, stats = collect_with_progress(
        sources, cfg, console, show_progress=show_progress, now=now, logger=logger
    )
    render_collect_stats(stats, console)
    log_event(
        logger,
        "Articles collected",
        event="collect_complete",
        feeds=stats.feeds,
        feeds_failed=stats.feeds_failed,
        kept=stats.kept,
        capped=stats.capped,
    )
    report = RunReport(status="collected", sources=sources, feeds=feeds, articles=articles)
    if not articles:
        return _stop(logger, "no_articles", "No articles survived filtering", report)

    try:
        provider = provider or create_provider(cfg.provider, logger)
    except ConfigurationError as exc:
        return _stop(logger, "summary_unavailable", str(exc), report)

    today = now.astimezone(ZoneInfo(cfg.digest.timezone)).date()
    try:
        report.digest = provider.summarize(articles, today)
    except UpstreamResponseError as exc:
        return _stop(logger, "summary_failed", str(exc), report)

    if not publish or not cfg.publish.enabled:
        return _stop(logger, "summarized", "Publishing disabled", report, level=logging.INFO)

    webhook_url = get_webhook_url(cfg.publish)
    if not webhook_url:
        return _stop(
            logger,
            "publish_skipped",
            f"Missing webhook URL (set {cfg.publish.webhook_url_env} or publish.webhook_url)",
            report,
        )

    report.publish = publish_digest(
        report.digest,
        webhook_url,
        timeout=cfg.publish.timeout_seconds,
        logger=logger,
    )
    if not report.publish.ok:
        return _stop(logger, "publish_failed", report.publish.error or "Publish failed", report)

    report.status = "published"
    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        status=report.status,
        articles=len(articles),
    )
    return report


def _stop(
    logger: logging.Logger,
    status: str,
    reason: str,
    report: RunReport | None = None,
    level: int = logging.WARNING,
) -> RunReport:
    """End the run early with a logged reason."""
    report = report or RunReport(status=status)
    report.status = status
    report.reason = reason
    log_event(
        logger,
        "Pipeline stopped",
        level=level,
        event="pipeline_stopped",
        status=status,
        reason=reason,
    )
    return report
