"""Tests for the Gemini summarization provider and its response parsing."""

from __future__ import annotations

from datetime import date
import json

import httpx
import pytest

from daily_digest.config import ProviderConfig
from daily_digest.core.types import Article
from daily_digest.errors import UpstreamResponseError
from daily_digest.llm.prompts import (
    build_digest_prompt,
    digest_heading,
    format_article_list,
    normalize_digest,
)
from daily_digest.llm.providers.gemini import GeminiProvider, _extract_text, _log_text

TODAY = date(2026, 10, 19)
ARTICLES = [
    Article(title="Rust 1.90 released", link="https://example.com/rust"),
    Article(title="New GPU lineup", link="https://example.com/gpu", published_raw="today"),
]


def _provider(handler) -> GeminiProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiProvider(ProviderConfig(), "test-key", client=client)


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


def test_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "# 📰 テックニュースダイジェスト"},
                        {"text": " 2026/10/19"},
                    ]
                }
            }
        ]
    }

    assert _extract_text(data) == "# 📰 テックニュースダイジェスト 2026/10/19"


def test_extract_text_falls_back_to_all_text_when_only_thought():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "first"},
                        {"thought": True, "text": " second"},
                    ]
                }
            }
        ]
    }

    assert _extract_text(data) == "first second"


@pytest.mark.parametrize("data", [{}, {"candidates": []}, {"candidates": [{}]}, None])
def test_extract_text_returns_empty_for_unexpected_shapes(data):
    assert _extract_text(data) == ""


def test_article_list_numbers_entries_from_one():
    assert format_article_list(ARTICLES) == (
        "[1] タイトル: Rust 1.90 released\n"
        "    URL: https://example.com/rust\n"
        "[2] タイトル: New GPU lineup\n"
        "    URL: https://example.com/gpu"
    )


def test_prompt_contains_heading_date_and_articles():
    prompt = build_digest_prompt(ARTICLES, TODAY)

    assert digest_heading(TODAY) in prompt
    assert "[1] タイトル: Rust 1.90 released" in prompt
    assert "    URL: https://example.com/gpu" in prompt


def test_summarize_posts_prompt_and_returns_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_reply("\n# 📰 テックニュースダイジェスト 2026/10/19\n\n## AI\n"))

    digest = _provider(handler).summarize(ARTICLES, TODAY)

    assert digest == "# 📰 テックニュースダイジェスト 2026/10/19\n\n## AI"
    assert seen["url"].endswith("/v1beta/models/gemini-2.5-flash:generateContent")
    assert "key=" not in seen["url"]
    assert seen["key"] == "test-key"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "[1] タイトル: Rust 1.90 released" in prompt
    assert seen["body"]["generationConfig"]["temperature"] == 0.4


def test_summarize_raises_on_http_error_status():
    provider = _provider(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(UpstreamResponseError, match="HTTP 500"):
        provider.summarize(ARTICLES, TODAY)


def test_summarize_raises_on_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamResponseError):
        _provider(handler).summarize(ARTICLES, TODAY)


def test_summarize_raises_on_invalid_json():
    provider = _provider(lambda request: httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(UpstreamResponseError, match="JSON"):
        provider.summarize(ARTICLES, TODAY)


def test_summarize_raises_on_missing_candidates():
    provider = _provider(
        lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})
    )

    with pytest.raises(UpstreamResponseError, match="no text"):
        provider.summarize(ARTICLES, TODAY)


def test_summarize_prepends_missing_heading():
    provider = _provider(lambda request: httpx.Response(200, json=_reply("## AI\n\n### Rust 1.90 released")))

    digest = provider.summarize(ARTICLES, TODAY)

    assert digest == "# 📰 テックニュースダイジェスト 2026/10/19\n\n## AI\n\n### Rust 1.90 released"


def test_summarize_drops_text_before_heading():
    reply = "はい、ダイジェストを作成しました。\n\n# 📰 テックニュースダイジェスト 2026/10/18\n## AI\n"
    provider = _provider(lambda request: httpx.Response(200, json=_reply(reply)))

    digest = provider.summarize(ARTICLES, TODAY)

    assert digest == "# 📰 テックニュースダイジェスト 2026/10/19\n\n## AI"


def test_normalize_digest_heading_only():
    assert normalize_digest("   ", TODAY) == digest_heading(TODAY)
    assert normalize_digest(digest_heading(TODAY), TODAY) == digest_heading(TODAY)


def test_logged_error_text_is_redacted_and_capped():
    text = _log_text("failed https://generativelanguage.googleapis.com/v1beta?key=secret " + "x" * 1000)

    assert "secret" not in text
    assert text.endswith("...(truncated)")
    assert len(text) == 500 + len("...(truncated)")
