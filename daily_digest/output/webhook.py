"""
Chat webhook publishing.

The digest is sent as a single JSON POST ``{"text": <markdown>}`` to an
incoming-webhook endpoint. Failures are reported in the returned
PublishResult and never raised. The endpoint URL is treated as a secret.
"""

from __future__ import annotations

import logging

import httpx

from ..core.types import PublishResult
from ..utils.logging import log_event, redact_text

SUCCESS_STATUSES = frozenset({200, 201})


def publish_digest(
    markdown: str,
    webhook_url: str,
    timeout: float,
    logger: logging.Logger | None = None,
    client: httpx.Client | None = None,
) -> PublishResult:
    """POST the digest to the chat webhook.

    Args:
        markdown: The digest text
        webhook_url: Incoming-webhook endpoint
        timeout: Request timeout in seconds
        logger: Logger for publish events
        client: Optional pre-built client (used by tests to inject a transport)

    Returns:
        PublishResult; ok only for HTTP 200 or 201
    """
    payload = {"text": markdown}
    try:
        if client is not None:
            resp = client.post(webhook_url, json=payload, timeout=timeout)
        else:
            with httpx.Client(timeout=timeout) as owned:
                resp = owned.post(webhook_url, json=payload)
    except httpx.HTTPError as exc:
        error = f"{type(exc).__name__}: {redact_text(str(exc))}"
        log_event(
            logger,
            "Publish failed",
            level=logging.ERROR,
            event="publish_failed",
            error=error,
        )
        return PublishResult(ok=False, status_code=None, error=error)

    if resp.status_code not in SUCCESS_STATUSES:
        log_event(
            logger,
            "Publish failed",
            level=logging.ERROR,
            event="publish_failed",
            status_code=resp.status_code,
        )
        return PublishResult(
            ok=False,
            status_code=resp.status_code,
            error=f"Unexpected status {resp.status_code}",
        )

    log_event(
        logger,
        "Digest published",
        event="publish_ok",
        status_code=resp.status_code,
        chars=len(markdown),
    )
    return PublishResult(ok=True, status_code=resp.status_code)
