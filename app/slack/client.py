"""
SlackClient - Slack Web API write-back.

Posts messages and opens modals with the bot token. Uses httpx.AsyncClient
so calls can be made from request handlers and background tasks.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api/"


@dataclass
class SlackWriteResult:
    """Result of a Slack Web API call."""

    success: bool
    data: dict | None = None  # Full response body from Slack
    error: str | None = None  # Slack error code or transport error


class SlackClient:
    """Call Slack Web API methods on behalf of the bot."""

    def __init__(
        self,
        bot_token: str,
        base_url: str = SLACK_API_BASE,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize SlackClient.

        Args:
            bot_token: Bot token (xoxb-...)
            base_url: Web API base URL
            timeout: Per-request timeout in seconds
            http_client: Pre-built client, mainly for tests
        """
        if not bot_token:
            raise ValueError("No Slack bot token provided. Set SLACK_BOT_TOKEN env var.")

        self.bot_token = bot_token
        self.http = http_client or httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {bot_token}"},
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http.aclose()

    async def _call(self, method: str, payload: dict[str, Any]) -> SlackWriteResult:
        try:
            response = await self.http.post(method, json=payload)
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", method, e)
            return SlackWriteResult(success=False, error=str(e))

        if response.status_code != 200:
            error = f"HTTP {response.status_code}"
            logger.error("%s failed: %s", method, error)
            return SlackWriteResult(success=False, error=error)

        data = response.json()
        if not data.get("ok"):
            error = data.get("error", "unknown_error")
            logger.error("%s failed: %s", method, error)
            return SlackWriteResult(success=False, data=data, error=error)

        return SlackWriteResult(success=True, data=data)

    async def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[dict] | None = None,
    ) -> SlackWriteResult:
        """
        Post a message to a channel, or to a user's DM when given a user ID.

        Args:
            channel: Channel ID or user ID
            text: Message text (also the notification fallback for blocks)
            blocks: Optional Block Kit blocks

        Returns:
            SlackWriteResult
        """
        payload: dict[str, Any] = {"channel": channel, "text": text}
        if blocks:
            payload["blocks"] = blocks
        return await self._call("chat.postMessage", payload)

    async def open_view(self, trigger_id: str, view: dict) -> SlackWriteResult:
        """
        Open a modal in response to an interaction.

        Args:
            trigger_id: Short-lived trigger from the interaction payload
            view: Modal view definition

        Returns:
            SlackWriteResult
        """
        return await self._call("views.open", {"trigger_id": trigger_id, "view": view})
