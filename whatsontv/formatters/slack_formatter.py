"""Slack formatter: Block Kit blocks, one header per network.

Rows look like:
    📝 *Show A* S01E01 (8:00 PM)
    🎬 *Show B* S02E01-04 (N/A)
"""
from __future__ import annotations

from whatsontv.formatters.base import BaseShowFormatter
from whatsontv.models.shows import CanonicalShow
from whatsontv.models.slack import (
    SlackBlock,
    context_block,
    divider_block,
    header_block,
    section_block,
)
from whatsontv.services.grouping import sort_episodes_by_number
from whatsontv.utils.formatting import (
    format_episode_info,
    format_episode_ranges,
    format_time,
    has_airtime,
)

TYPE_EMOJI = {
    "scripted": "📝",
    "reality": "👁",
    "talk": "🎙",
    "documentary": "🎬",
    "variety": "🎭",
    "game": "🎮",
    "news": "📰",
    "sports": "⚽",
}
DEFAULT_EMOJI = "📺"


def escape_mrkdwn(text: str) -> str:
    """Escape the three characters Slack treats as control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SlackShowFormatter(BaseShowFormatter[SlackBlock]):
    """Formats shows as Slack Block Kit blocks."""

    def type_emoji(self, show_type: str) -> str:
        return TYPE_EMOJI.get(show_type.lower(), DEFAULT_EMOJI) if show_type else DEFAULT_EMOJI

    def _line(self, show: CanonicalShow, episode_info: str, airtime: str) -> str:
        name = escape_mrkdwn(self.display_name(show))
        parts = [self.type_emoji(show.type), f"*{name}*"]
        if episode_info:
            parts.append(episode_info)
        parts.append(f"({airtime})")
        return " ".join(parts)

    def format_timed_show(self, show: CanonicalShow) -> SlackBlock:
        return section_block(self._line(show, format_episode_info(show), format_time(show.airtime)))

    def format_untimed_show(self, show: CanonicalShow) -> SlackBlock:
        return section_block(self._line(show, format_episode_info(show), self.NO_AIRTIME))

    def format_multiple_episodes(self, shows: list[CanonicalShow]) -> list[SlackBlock]:
        if not shows:
            return [section_block("No episodes found")]
        first = sort_episodes_by_number(shows)[0]
        airtime = format_time(first.airtime) if has_airtime(first) else self.NO_AIRTIME
        return [section_block(self._line(first, format_episode_ranges(shows), airtime))]

    def format_network_header(self, network: str) -> list[SlackBlock]:
        return [header_block(self.display_network(network))]

    def format_header(self) -> list[SlackBlock]:
        return [header_block("Shows by Network"), divider_block()]

    def format_footer(self) -> list[SlackBlock]:
        return [context_block("_Data provided by TVMaze API_")]

    def format_network_separator(self) -> list[SlackBlock]:
        return [divider_block()]
