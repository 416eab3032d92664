"""Google Gemini provider for digest summarization."""

from __future__ import annotations

from datetime import date
import logging
from typing import Any

import httpx

from ...config import ProviderConfig
from ...core.types import Article
from ...errors import ConfigurationError, UpstreamResponseError
from ...utils.logging import log_event, redact_text, truncate_text
from ..prompts import build_digest_prompt, normalize_digest
from .base import SummaryProvider


LOG_ERROR_CHARS = 500


class GeminiProvider(SummaryProvider):
    """Gemini-backed provider calling the generateContent REST endpoint."""

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        logger: logging.Logger | None = None,
        client: httpx.Client | None = None,
    ):
        if not api_key:
            raise ConfigurationError(
                f"Missing Google API key (set {cfg.google_api_key_env} or provider.api_key)"
            )
        self.cfg = cfg
        self.api_key = api_key
        self.logger = logger
        self.client = client

    def summarize(self, articles: list[Article], today: date) -> str:
        prompt = build_digest_prompt(articles, today)
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "maxOutputTokens": self.cfg.max_output_tokens,
            },
        }
        try:
            data = self._post(payload)
        except httpx.HTTPStatusError as exc:
            self._log_response("provider_error", status_code=exc.response.status_code)
            raise UpstreamResponseError(
                f"Gemini returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            self._log_response("provider_error", error=_log_text(str(exc)))
            raise UpstreamResponseError(f"Gemini request failed: {type(exc).__name__}") from exc
        except ValueError as exc:
            self._log_response("parse_error", error=_log_text(str(exc)))
            raise UpstreamResponseError("Gemini response is not valid JSON") from exc

        content = _extract_text(data).strip()
        if not content:
            self._log_response("parse_error", finish_reason=_finish_reason(data))
            raise UpstreamResponseError("Gemini response contained no text")

        content = normalize_digest(content, today)
        self._log_response("ok", article_count=len(articles), chars=len(content))
        return content

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/v1beta/models/{self.cfg.model}:generateContent"
        headers = {"x-goog-api-key": self.api_key}
        if self.client is not None:
            resp = self.client.post(
                url, headers=headers, json=payload, timeout=self.cfg.timeout_seconds
            )
            resp.raise_for_status()
            return resp.json()
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _log_response(self, status: str, **fields: Any) -> None:
        level = logging.INFO if status == "ok" else logging.WARNING
        log_event(
            self.logger,
            "LLM response",
            level=level,
            event="llm_summarize",
            status=status,
            model=self.cfg.model,
            **fields,
        )


def _log_text(text: str) -> str:
    return truncate_text(redact_text(text), LOG_ERROR_CHARS)


def _extract_text(data: Any) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""

    if not isinstance(parts, list):
        return ""

    non_thought_chunks: list[str] = []
    all_chunks: list[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if text is None:
            continue
        chunk = str(text)
        if not chunk:
            continue
        all_chunks.append(chunk)
        if not bool(part.get("thought")):
            non_thought_chunks.append(chunk)

    if non_thought_chunks:
        return "".join(non_thought_chunks)
    return "".join(all_chunks)


def _finish_reason(data: Any) -> str | None:
    try:
        return data["candidates"][0].get("finishReason")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
