"""Tests for SlackClient. HTTP is served by httpx.MockTransport."""
import json

import httpx
import pytest

from app.slack.client import SlackClient


def make_client(handler) -> SlackClient:
    http = httpx.AsyncClient(
        base_url="https://slack.test/api/",
        transport=httpx.MockTransport(handler),
    )
    return SlackClient("xoxb-test", http_client=http)


class TestSlackClientInit:
    """Tests for SlackClient construction."""

    def test_requires_token(self):
        with pytest.raises(ValueError, match="No Slack bot token"):
            SlackClient("")

    def test_sets_bearer_header(self):
        client = SlackClient("xoxb-test")

        assert client.http.headers["Authorization"] == "Bearer xoxb-test"


@pytest.mark.asyncio
class TestSlackClientCalls:
    """Tests for Web API calls."""

    async def test_post_message(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"ok": True, "ts": "1.0"})

        client = make_client(handler)
        result = await client.post_message("C123", "Started tracking your time.")

        assert result.success is True
        assert result.data["ts"] == "1.0"
        assert requests[0].url.path == "/api/chat.postMessage"
        assert json.loads(requests[0].content) == {
            "channel": "C123",
            "text": "Started tracking your time.",
        }

    async def test_post_message_with_blocks(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True})

        client = make_client(handler)
        await client.post_message("C123", "menu", blocks=[{"type": "divider"}])

        assert bodies[0]["blocks"] == [{"type": "divider"}]

    async def test_open_view(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"ok": True})

        client = make_client(handler)
        result = await client.open_view("trigger-1", {"type": "modal"})

        assert result.success is True
        assert requests[0].url.path == "/api/views.open"
        assert json.loads(requests[0].content) == {
            "trigger_id": "trigger-1",
            "view": {"type": "modal"},
        }

    async def test_slack_error_response(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"ok": False, "error": "channel_not_found"})
        )

        result = await client.post_message("C404", "hi")

        assert result.success is False
        assert result.error == "channel_not_found"

    async def test_http_error_status(self):
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        result = await client.post_message("C123", "hi")

        assert result.success is False
        assert result.error == "HTTP 500"

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        result = await client.post_message("C123", "hi")

        assert result.success is False
        assert "connection refused" in result.error
