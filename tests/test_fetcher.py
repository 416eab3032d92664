"""Tests for single-attempt feed fetching."""

import httpx

from daily_digest.fetch.fetcher import fetch_feed


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_returns_body_and_sends_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("User-Agent")
        return httpx.Response(200, content=b"<rss/>")

    result = fetch_feed("https://example.com/rss.xml", timeout=5, user_agent="digest-test", client=_client(handler))

    assert result.status_code == 200
    assert result.content == b"<rss/>"
    assert result.text == "<rss/>"
    assert result.error is None
    assert seen["ua"] == "digest-test"


def test_fetch_returns_non_success_status_without_error():
    result = fetch_feed(
        "https://example.com/rss.xml",
        timeout=5,
        user_agent="ua",
        client=_client(lambda request: httpx.Response(500, text="oops")),
    )

    assert result.status_code == 500
    assert result.error is None


def test_fetch_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, text="<feed/>")

    result = fetch_feed("https://example.com/old", timeout=5, user_agent="ua", client=_client(handler))

    assert result.status_code == 200
    assert result.text == "<feed/>"


def test_fetch_folds_transport_errors_into_result():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    result = fetch_feed("https://unreachable.invalid/rss", timeout=5, user_agent="ua", client=_client(handler))

    assert result.status_code is None
    assert result.text is None
    assert result.error.startswith("ConnectError")


def test_fetch_folds_timeouts_into_result():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = fetch_feed("https://slow.example.com/rss", timeout=1, user_agent="ua", client=_client(handler))

    assert result.status_code is None
    assert "ReadTimeout" in result.error
