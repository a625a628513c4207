"""Output services: fetch shows and deliver them to a destination.

Both services share the same flow:

1. Fetch shows through TVShowService
2. Group by network (or sort flat by time)
3. Format with the destination's formatter
4. Deliver (print lines / post Slack messages)

Usage:
    service = ConsoleOutputService(show_service, TextShowFormatter(AnsiStyle()))
    await service.render(ShowOptions(), sort_by_time=False, debug=False)
"""
from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import date as date_type
from typing import Any

import structlog

from whatsontv.api_clients.slack_client import SlackClient
from whatsontv.formatters.slack_formatter import SlackShowFormatter
from whatsontv.formatters.text_formatter import TextShowFormatter
from whatsontv.models.shows import CanonicalShow, ShowOptions
from whatsontv.models.slack import SlackBlock, header_block, section_block
from whatsontv.services.grouping import group_shows_by_network
from whatsontv.services.show_service import TVShowService
from whatsontv.utils.exceptions import WhatsOnTVError

logger = structlog.get_logger(__name__)

# Slack rejects messages with more than 50 blocks
SLACK_MAX_BLOCKS = 50

NO_SHOWS_MESSAGE = "No shows found for the specified criteria."


def format_display_date(iso_date: str) -> str:
    """"2025-03-14" -> "Friday, March 14, 2025"."""
    day = date_type.fromisoformat(iso_date)
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def debug_summary(shows: list[CanonicalShow], iso_date: str) -> dict[str, Any]:
    """Collect the facts printed in debug mode."""
    return {
        "date": iso_date,
        "networks": sorted(group_shows_by_network(shows)),
        "total_shows": len(shows),
    }


class ConsoleOutputService:
    """Prints the schedule to a text stream.

    Args:
        show_service: Source of shows.
        formatter: Row formatter.
        write: Line sink; defaults to printing on stdout.
    """

    def __init__(
        self,
        show_service: TVShowService,
        formatter: TextShowFormatter,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self._show_service = show_service
        self._formatter = formatter
        self._write = write or (lambda line: print(line, file=sys.stdout))

    async def render(
        self,
        options: ShowOptions,
        sort_by_time: bool = False,
        debug: bool = False,
    ) -> list[CanonicalShow]:
        """Fetch and print the schedule; returns the shows that were printed."""
        shows = await self._show_service.fetch_shows(options)

        self._write(f"TV Schedule for {format_display_date(options.date)}")
        self._write("")

        if debug:
            summary = debug_summary(shows, options.date)
            self._write(f"Date queried: {summary['date']}")
            self._write(f"Available networks: {', '.join(summary['networks']) or 'none'}")
            self._write(f"Total shows: {summary['total_shows']}")
            self._write("")

        if not shows:
            self._write(NO_SHOWS_MESSAGE)
            return shows

        if sort_by_time:
            lines = self._formatter.format_flat(shows)
        else:
            lines = self._formatter.format_network_groups(group_shows_by_network(shows))

        for line in lines:
            self._write(line)
        return shows


class SlackOutputService:
    """Posts the schedule to a Slack channel.

    Args:
        show_service: Source of shows.
        formatter: Block formatter.
        slack_client: Client used to post messages.
        channel: Target channel ID or name.
    """

    def __init__(
        self,
        show_service: TVShowService,
        formatter: SlackShowFormatter,
        slack_client: SlackClient,
        channel: str,
    ) -> None:
        self._show_service = show_service
        self._formatter = formatter
        self._slack = slack_client
        self._channel = channel

    async def render(
        self,
        options: ShowOptions,
        sort_by_time: bool = False,
        debug: bool = False,
    ) -> list[CanonicalShow]:
        """Fetch the schedule and post it; errors are reported to the channel and re-raised."""
        try:
            shows = await self._show_service.fetch_shows(options)
            title = f"📺 TV Shows for {format_display_date(options.date)}"
            await self._slack.post_message(self._channel, text=title, blocks=[header_block(title)])

            if not shows:
                await self._slack.post_message(self._channel, text=NO_SHOWS_MESSAGE)
                return shows

            if sort_by_time:
                blocks = self._formatter.format_flat(shows)
            else:
                blocks = self._formatter.format_network_groups(group_shows_by_network(shows))
            await self._post_blocks(blocks)

            if debug:
                await self._post_debug(shows, options.date)
            return shows
        except WhatsOnTVError as e:
            await self._report_error(e)
            raise

    async def _post_blocks(self, blocks: list[SlackBlock]) -> None:
        for start in range(0, len(blocks), SLACK_MAX_BLOCKS):
            chunk = blocks[start:start + SLACK_MAX_BLOCKS]
            await self._slack.post_message(self._channel, text="TV Shows by Network", blocks=chunk)

    async def _post_debug(self, shows: list[CanonicalShow], iso_date: str) -> None:
        summary = debug_summary(shows, iso_date)
        text = "\n".join([
            "*Debug Information:*",
            f"Date queried: {summary['date']}",
            f"Available Networks: {', '.join(summary['networks'])}",
            f"Total Shows: {summary['total_shows']}",
        ])
        try:
            await self._slack.post_message(self._channel, text=text, blocks=[section_block(text)])
        except WhatsOnTVError as e:
            logger.error("slack_debug_failed", channel=self._channel, error=str(e))

    async def _report_error(self, error: WhatsOnTVError) -> None:
        logger.error("slack_render_failed", channel=self._channel, error=error.message)
        try:
            await self._slack.post_message(self._channel, text=f"Error fetching TV shows: {error.message}")
        except WhatsOnTVError as send_error:
            logger.error(
                "slack_error_report_failed",
                channel=self._channel,
                original_error=error.message,
                send_error=str(send_error),
            )
