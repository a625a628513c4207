"""Fetch orchestrator: turns ShowOptions into a filtered list of CanonicalShow.

Flow for one fetch:

1. Pick the endpoints from `fetch_source` (network, web, or both)
2. Request them concurrently and wait for both
3. Merge raw items, network items first
4. Normalize each item, dropping the ones that cannot be normalized
5. Apply type → network → genre → language filters

A failing source counts as an empty source, so one endpoint being down
never hides the other's shows.

Usage:
    async with TVMazeClient() as client:
        service = TVShowService(client)
        shows = await service.fetch_shows(ShowOptions(country="GB"))
"""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

import httpx
import structlog

from whatsontv.api_clients.tvmaze_client import TVMazeClient
from whatsontv.models.shows import CanonicalShow, NetworkGroups, ShowOptions
from whatsontv.services.filters import apply_filters
from whatsontv.services.grouping import group_shows_by_network, sort_shows_by_time
from whatsontv.services.normalizer import normalize_schedule
from whatsontv.utils.exceptions import APIClientError

logger = structlog.get_logger(__name__)


class TVShowService:
    """Fetches, normalizes and filters TV schedules.

    Args:
        client: TVMazeClient used for both schedule endpoints.
        fail_fast: Propagate source failures instead of treating them as empty.
    """

    def __init__(self, client: TVMazeClient, fail_fast: bool = False) -> None:
        self._client = client
        self._fail_fast = fail_fast

    async def fetch_shows(self, options: ShowOptions | None = None) -> list[CanonicalShow]:
        """Fetch the schedule described by `options`.

        Args:
            options: Date, country, filters and fetch source. Defaults to
                today's US schedule from both sources, unfiltered.

        Returns:
            Filtered shows in source order (network first), neither sorted
            nor grouped.
        """
        options = options or ShowOptions()

        requests: list[Awaitable[list[Any]]] = []
        if options.fetch_source in ("network", "all"):
            requests.append(self._fetch_source(
                "network", self._client.get_network_schedule(options.date, options.country)
            ))
        if options.fetch_source in ("web", "all"):
            requests.append(self._fetch_source(
                "web", self._client.get_web_schedule(options.date)
            ))

        results = await asyncio.gather(*requests)
        raw_items = [item for items in results for item in items]

        shows = normalize_schedule(raw_items)
        filtered = apply_filters(shows, options)

        logger.info(
            "shows_fetched",
            date=options.date,
            country=options.country,
            fetch_source=options.fetch_source,
            raw=len(raw_items),
            normalized=len(shows),
            returned=len(filtered),
        )
        return filtered

    def group_shows_by_network(self, shows: list[CanonicalShow]) -> NetworkGroups:
        return group_shows_by_network(shows)

    def sort_shows_by_time(self, shows: list[CanonicalShow]) -> list[CanonicalShow]:
        return sort_shows_by_time(shows)

    async def _fetch_source(self, source: str, request: Awaitable[list[Any]]) -> list[Any]:
        """Await one schedule request, turning failures into an empty source."""
        try:
            items = await request
        except (APIClientError, httpx.HTTPError) as e:
            if self._fail_fast:
                raise
            logger.warning(
                "schedule_fetch_failed",
                source=source,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []
        return items if isinstance(items, list) else []
