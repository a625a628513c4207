"""Base show formatter: layout rules shared by every output format.

Subclasses decide what a row looks like (a string, a Slack block); this
class decides which rows exist:

- networks are emitted in alphabetical order, empty ones skipped
- within a network, shows are sorted by airtime and grouped by show
- a show with one episode gets one row (timed or untimed)
- several untimed episodes of one show collapse into one row
- several episodes with airtimes get one row each
"""
from __future__ import annotations

from typing import Generic, TypeVar

from whatsontv.models.shows import UNKNOWN_NETWORK, CanonicalShow, NetworkGroups
from whatsontv.services.grouping import group_shows_by_show_id, sort_shows_by_time
from whatsontv.utils.formatting import all_without_airtime, has_airtime

TOutput = TypeVar("TOutput")


class BaseShowFormatter(Generic[TOutput]):
    """Format canonical shows into rows of type TOutput."""

    NO_AIRTIME = "N/A"
    NO_NETWORK = UNKNOWN_NETWORK
    UNKNOWN_SHOW = "Unknown Show"
    UNKNOWN_TYPE = "Unknown"

    # ── Row formatting (subclasses) ───────────────────────────────────

    def format_timed_show(self, show: CanonicalShow) -> TOutput:
        raise NotImplementedError

    def format_untimed_show(self, show: CanonicalShow) -> TOutput:
        raise NotImplementedError

    def format_multiple_episodes(self, shows: list[CanonicalShow]) -> list[TOutput]:
        raise NotImplementedError

    def format_network_header(self, network: str) -> list[TOutput]:
        raise NotImplementedError

    def format_header(self) -> list[TOutput]:
        return []

    def format_footer(self) -> list[TOutput]:
        return []

    def format_network_separator(self) -> list[TOutput]:
        return []

    # ── Layout ────────────────────────────────────────────────────────

    def format_show(self, show: CanonicalShow) -> TOutput:
        return self.format_timed_show(show) if has_airtime(show) else self.format_untimed_show(show)

    def format_network(self, network: str, shows: list[CanonicalShow]) -> list[TOutput]:
        """Format one network's header followed by its shows."""
        if not shows:
            return []

        output = list(self.format_network_header(network))
        sorted_shows = sort_shows_by_time(shows)
        show_groups = group_shows_by_show_id(sorted_shows)
        processed: set[int] = set()

        for show in sorted_shows:
            if show.show_id in processed:
                continue
            processed.add(show.show_id)
            group = show_groups[show.show_id]

            if len(group) == 1:
                output.append(self.format_show(show))
            elif all_without_airtime(group):
                output.extend(self.format_multiple_episodes(group))
            else:
                output.extend(self.format_show(episode) for episode in sort_shows_by_time(group))

        return output

    def format_network_groups(self, network_groups: NetworkGroups) -> list[TOutput]:
        """Format every non-empty network, alphabetically, between header and footer."""
        output = list(self.format_header())
        first = True
        for network in sorted(network_groups):
            shows = network_groups[network]
            if not shows:
                continue
            if not first:
                output.extend(self.format_network_separator())
            first = False
            output.extend(self.format_network(network, shows))
        output.extend(self.format_footer())
        return output

    def format_flat(self, shows: list[CanonicalShow]) -> list[TOutput]:
        """Format shows as one time-sorted list without network headers."""
        output = list(self.format_header())
        output.extend(self.format_show(show) for show in sort_shows_by_time(shows))
        output.extend(self.format_footer())
        return output

    # ── Helpers ───────────────────────────────────────────────────────

    def display_name(self, show: CanonicalShow) -> str:
        return show.show_name or show.name or self.UNKNOWN_SHOW

    def display_type(self, show: CanonicalShow) -> str:
        if not show.type or show.type.lower() == "unknown":
            return self.UNKNOWN_TYPE
        return show.type

    def display_network(self, network: str | None) -> str:
        return network or self.NO_NETWORK
