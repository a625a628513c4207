"""TV Maze API client for schedule data.

TV Maze provides free TV schedule data.
Base URL: https://api.tvmaze.com
Rate Limit: 20 requests per 10 seconds per IP
Auth: None required

Endpoints:
- GET /schedule?date=YYYY-MM-DD&country=XX   network (broadcast/cable) schedule
- GET /schedule/web?date=YYYY-MM-DD          web/streaming schedule (no country)

The client returns raw items untouched; normalization happens in
whatsontv.services.normalizer.
"""
from __future__ import annotations

from typing import Any

import httpx
import structlog

from whatsontv.api_clients.base_client import BaseAPIClient

logger = structlog.get_logger(__name__)

TVMAZE_BASE_URL = "https://api.tvmaze.com"


class TVMazeClient(BaseAPIClient):
    """Client for the TV Maze schedule API."""

    def __init__(
        self,
        base_url: str = TVMAZE_BASE_URL,
        rate_limit: float = 0.0,
        timeout: float = 30,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            rate_limit=rate_limit,
            timeout=timeout,
            max_retries=max_retries,
            transport=transport,
        )

    # ── Schedule Endpoints ────────────────────────────────────────────

    async def get_network_schedule(self, date: str, country: str | None = "US") -> list[Any]:
        """Get the network schedule for a country and date.

        Args:
            date: Date string in YYYY-MM-DD format.
            country: ISO 3166-1 country code; omitted from the query when blank.

        Returns:
            Raw schedule items (show details under `show`). A non-list body yields [].
        """
        params: dict[str, Any] = {"date": date}
        if country and country.strip():
            params["country"] = country.strip()
        data = await self.get("/schedule", params=params)
        return self._as_items(data, "/schedule")

    async def get_web_schedule(self, date: str) -> list[Any]:
        """Get the web/streaming schedule for a date.

        Args:
            date: Date string in YYYY-MM-DD format.

        Returns:
            Raw schedule items (show details under `_embedded.show`).
        """
        data = await self.get("/schedule/web", params={"date": date})
        return self._as_items(data, "/schedule/web")

    @staticmethod
    def _as_items(data: Any, endpoint: str) -> list[Any]:
        if isinstance(data, list):
            return data
        logger.warning("unexpected_schedule_payload", endpoint=endpoint, payload_type=type(data).__name__)
        return []
