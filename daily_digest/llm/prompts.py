"""Prompt loading and rendering helpers for LLM providers."""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path

from ..core.types import Article


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

DATE_FORMAT = "%Y/%m/%d"
DIGEST_TITLE = "# 📰 テックニュースダイジェスト"
DIGEST_HEADING = DIGEST_TITLE + " {date}"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def format_digest_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def digest_heading(day: date) -> str:
    """The fixed H1 line every digest starts with."""
    return DIGEST_HEADING.format(date=format_digest_date(day))


def normalize_digest(text: str, day: date) -> str:
    """Make model output start with the dated heading.

    Anything before a heading line the model wrote is dropped and that line is
    replaced with the exact heading; a missing heading is prepended.
    """
    lines = text.strip().splitlines()
    for idx, line in enumerate(lines):
        if line.strip().startswith(DIGEST_TITLE):
            lines = lines[idx + 1 :]
            break
    body = "\n".join(lines).strip()
    heading = digest_heading(day)
    return f"{heading}\n\n{body}" if body else heading


def format_article_list(articles: list[Article]) -> str:
    lines = []
    for idx, article in enumerate(articles, start=1):
        lines.append(f"[{idx}] タイトル: {article.title}")
        lines.append(f"    URL: {article.link}")
    return "\n".join(lines)


def build_digest_prompt(articles: list[Article], today: date) -> str:
    return _render_template(
        "digest",
        date=format_digest_date(today),
        articles=format_article_list(articles),
    )
