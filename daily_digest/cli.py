"""
Command-line interface for the Daily Digest.

Uses Typer to provide a CLI with options for all major configuration
settings. Supports loading .env files for API key and webhook configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config, validate_config
from .errors import ConfigurationError
from .input.sources import load_sources
from .runner import collect_with_progress, render_collect_stats, run_pipeline
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()

DEFAULT_CONFIG_PATH = Path("config.yaml")


def _load(
    config: Path | None,
    lookback_hours: float | None,
    max_articles: int | None,
    log_level: str | None,
) -> AppConfig:
    # Load environment variables from .env if available
    load_dotenv()

    if config is None and DEFAULT_CONFIG_PATH.is_file():
        config = DEFAULT_CONFIG_PATH
    cfg = load_config(str(config) if config else None)

    if lookback_hours is not None:
        cfg.feeds.lookback_hours = lookback_hours
    if max_articles is not None:
        cfg.feeds.max_articles = max_articles
    if log_level:
        cfg.logging.level = log_level
    return cfg


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    sources: Path | None = typer.Option(
        None, "--sources", "-s", exists=True, dir_okay=False, help="Feed source list file."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Directory for the run log file."
    ),
    lookback_hours: float | None = typer.Option(
        None, "--lookback-hours", min=0.0, help="Recency window in hours (default 24)."
    ),
    max_articles: int | None = typer.Option(
        None, "--max-articles", min=1, help="Maximum articles sent to the summarizer (default 15)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Summarize but print the digest instead of publishing it."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="GOOGLE_API_KEY",
        show_envvar=False,
        help="Override provider API key (or set GOOGLE_API_KEY / .env).",
    ),
    webhook_url: str | None = typer.Option(
        None,
        "--webhook-url",
        envvar="DIGEST_WEBHOOK_URL",
        show_envvar=False,
        help="Override chat webhook endpoint (or set DIGEST_WEBHOOK_URL / .env).",
    ),
):
    """Run the daily digest pipeline.

    Fetches all configured feeds, keeps recent articles, summarizes them
    with the LLM provider and posts the digest to the chat webhook.
    """
    cfg = _load(config, lookback_hours, max_articles, log_level)

    # Override with CLI options
    if api_key:
        cfg.provider.api_key = api_key
    if webhook_url:
        cfg.publish.webhook_url = webhook_url
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    report = run_pipeline(
        cfg,
        sources_path=sources,
        output_dir=output,
        publish=not dry_run,
        show_progress=progress,
        console=console,
    )

    if dry_run and report.digest:
        console.rule("Digest")
        console.print(report.digest, markup=False, highlight=False)
    message = f"Run finished: {report.status}"
    if report.reason:
        message += f" ({report.reason})"
    console.print(message, markup=False)


@app.command()
def collect(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    sources: Path | None = typer.Option(
        None, "--sources", "-s", exists=True, dir_okay=False, help="Feed source list file."
    ),
    lookback_hours: float | None = typer.Option(None, "--lookback-hours", min=0.0),
    max_articles: int | None = typer.Option(None, "--max-articles", min=1),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Fetch and filter feeds only, and print the resulting article batch."""
    cfg = _load(config, lookback_hours, max_articles, log_level)
    cfg.logging.file = False
    logger = setup_logging(cfg.logging, None)

    try:
        validate_config(cfg)
        urls = load_sources(cfg.sources, cfg.fetch, sources)
    except ConfigurationError as exc:
        console.print(f"Configuration error: {exc}", markup=False)
        raise typer.Exit(code=2)

    articles, feeds, stats = collect_with_progress(
        urls, cfg, console, show_progress=progress, logger=logger
    )
    render_collect_stats(stats, console)

    failed = [feed for feed in feeds if not feed.ok]
    if failed:
        failures = Table(title="Failed feeds")
        failures.add_column("URL", overflow="fold")
        failures.add_column("Reason")
        failures.add_column("Error", overflow="fold")
        for feed in failed:
            failures.add_row(feed.url, feed.reason or "", feed.error or "")
        console.print(failures)

    table = Table(title=f"Articles ({len(articles)})")
    table.add_column("#", justify="right")
    table.add_column("Title", overflow="fold")
    table.add_column("Published")
    table.add_column("Link", overflow="fold")
    for idx, article in enumerate(articles, start=1):
        table.add_row(str(idx), article.title, article.published_raw or "-", article.link)
    console.print(table)


if __name__ == "__main__":
    app()
