"""
HTTP feed fetching.

Each feed is fetched with a single synchronous GET. Non-success status codes
are returned to the caller rather than raised, and transport failures are
folded into the result so one unreachable feed never aborts a run.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either a response body will be populated (success) or error will be
    populated (failure), but never both. status_code may be None for
    network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The decoded response body, or None on error
        content: The raw response body, or None on error
        error: Error message if fetch failed, None on success
    """

    url: str
    status_code: int | None
    text: str | None
    content: bytes | None = None
    error: str | None = None


def fetch_feed(
    url: str,
    timeout: float,
    user_agent: str,
    trust_env: bool = True,
    client: httpx.Client | None = None,
) -> FetchResult:
    """Fetch a feed URL with one attempt and a bounded timeout.

    Args:
        url: The feed URL to fetch
        timeout: Request timeout in seconds
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        client: Optional pre-built client (used by tests to inject a transport)

    Returns:
        FetchResult with the body on any HTTP response, or an error message on
        transport failure
    """
    headers = {"User-Agent": user_agent}
    try:
        if client is not None:
            resp = client.get(url, headers=headers, timeout=timeout, follow_redirects=True)
        else:
            with httpx.Client(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=trust_env,
            ) as owned:
                resp = owned.get(url)
    except httpx.HTTPError as exc:
        return FetchResult(
            url=url,
            status_code=None,
            text=None,
            error=f"{type(exc).__name__}: {exc}",
        )
    return FetchResult(
        url=url,
        status_code=resp.status_code,
        text=resp.text,
        content=resp.content,
    )
