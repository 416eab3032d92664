"""Tests for posting the digest to the chat webhook."""

import json

import httpx
import pytest

from daily_digest.output.webhook import publish_digest

WEBHOOK = "https://chat.example.com/v1/spaces/abc/messages?key=secret&token=secret"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize("status", [200, 201])
def test_publish_succeeds_on_200_or_201(status):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(status, json={})

    result = publish_digest("# digest", WEBHOOK, timeout=5, client=_client(handler))

    assert result.ok is True
    assert result.status_code == status
    assert seen["method"] == "POST"
    assert seen["body"] == {"text": "# digest"}


@pytest.mark.parametrize("status", [204, 400, 500])
def test_publish_fails_on_other_statuses(status):
    result = publish_digest(
        "# digest", WEBHOOK, timeout=5, client=_client(lambda request: httpx.Response(status))
    )

    assert result.ok is False
    assert result.status_code == status
    assert str(status) in result.error


def test_publish_does_not_raise_on_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(f"failed to reach {WEBHOOK}", request=request)

    result = publish_digest("# digest", WEBHOOK, timeout=5, client=_client(handler))

    assert result.ok is False
    assert result.status_code is None
    assert "secret" not in result.error
