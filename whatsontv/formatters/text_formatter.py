"""Terminal formatter: one padded, colorized line per show."""
from __future__ import annotations

from whatsontv.formatters.base import BaseShowFormatter
from whatsontv.models.shows import CanonicalShow
from whatsontv.services.grouping import sort_episodes_by_number
from whatsontv.utils.formatting import format_episode_info, format_episode_ranges, pad
from whatsontv.utils.style import PlainStyle

# Column widths
PAD_TIME = 8
PAD_NETWORK = 18
PAD_TYPE = 12
PAD_SHOW = 30
PAD_EPISODE = 20


class TextShowFormatter(BaseShowFormatter[str]):
    """Formats shows as aligned text columns: time, network, type, show, episode."""

    def __init__(self, style: PlainStyle | None = None) -> None:
        self._style = style or PlainStyle()

    def _row(self, time: str, show: CanonicalShow, episode_info: str) -> str:
        style = self._style
        return " ".join([
            pad(time, PAD_TIME),
            style.bold_cyan(pad(self.display_network(show.network), PAD_NETWORK)),
            style.magenta(pad(self.display_type(show), PAD_TYPE)),
            style.green(pad(self.display_name(show), PAD_SHOW)),
            style.yellow(pad(episode_info, PAD_EPISODE)),
        ]).rstrip()

    def format_timed_show(self, show: CanonicalShow) -> str:
        return self._row(show.airtime or self.NO_AIRTIME, show, format_episode_info(show))

    def format_untimed_show(self, show: CanonicalShow) -> str:
        return self._row(self.NO_AIRTIME, show, format_episode_info(show))

    def format_multiple_episodes(self, shows: list[CanonicalShow]) -> list[str]:
        if not shows:
            return []
        first = sort_episodes_by_number(shows)[0]
        return [self._row(self.NO_AIRTIME, first, format_episode_ranges(shows))]

    def format_network_header(self, network: str) -> list[str]:
        header = f"{self.display_network(network)}:"
        return [self._style.bold_cyan(header), self._style.dim("-" * len(header))]

    def format_network_separator(self) -> list[str]:
        return [""]
