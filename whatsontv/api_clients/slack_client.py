"""Slack Web API client for posting schedule messages.

Only `chat.postMessage` is used. Slack answers HTTP 200 even for rejected
messages, so the `ok` flag in the body is checked and turned into
SlackDeliveryError.
"""
from __future__ import annotations

from typing import Any

import httpx
import structlog

from whatsontv.api_clients.base_client import BaseAPIClient
from whatsontv.models.slack import SlackBlock
from whatsontv.utils.exceptions import SlackDeliveryError

logger = structlog.get_logger(__name__)

SLACK_BASE_URL = "https://slack.com/api"


class SlackClient(BaseAPIClient):
    """Client for the Slack Web API.

    Args:
        token: Bot token (xoxb-...).
        username: Display name for posted messages.
    """

    def __init__(
        self,
        token: str,
        username: str = "WhatsOnTV",
        base_url: str = SLACK_BASE_URL,
        timeout: float = 30,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            rate_limit=1.0,  # chat.postMessage allows ~1 message/sec per channel
            timeout=timeout,
            max_retries=max_retries,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )
        self._username = username

    async def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[SlackBlock] | None = None,
    ) -> dict[str, Any]:
        """Post a message to a channel.

        Args:
            channel: Channel ID or name.
            text: Fallback text (notifications, clients without blocks).
            blocks: Optional Block Kit blocks.

        Returns:
            The Slack API response body.

        Raises:
            SlackDeliveryError: When Slack answers with ok=false.
        """
        payload: dict[str, Any] = {
            "channel": channel,
            "text": text,
            "username": self._username,
            "mrkdwn": True,
        }
        if blocks:
            payload["blocks"] = [block.to_dict() for block in blocks]

        data = await self.post("/chat.postMessage", json=payload)
        if not isinstance(data, dict) or not data.get("ok"):
            error = data.get("error", "unknown_error") if isinstance(data, dict) else "invalid_response"
            raise SlackDeliveryError(error=error, channel=channel)

        logger.info("slack_message_sent", channel=channel, blocks=len(blocks or []))
        return data
