"""Formatting helpers shared by the terminal and Slack formatters.

Provides:
- format_time(): "20:00" -> "8:00 PM"
- format_episode_info(): season/number -> "S01E05"
- format_episode_ranges(): consecutive episodes -> "S01E01-03, S01E05"
- has_airtime() / all_without_airtime()
- pad()
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from whatsontv.models.shows import CanonicalShow
from whatsontv.services.grouping import parse_airtime, sort_episodes_by_number

NO_AIRTIME = "TBA"


def format_time(airtime: Optional[str]) -> str:
    """Format a 24-hour time as 12-hour with AM/PM.

    Examples:
        >>> format_time("20:00")
        '8:00 PM'
        >>> format_time("00:30")
        '12:30 AM'
        >>> format_time(None)
        'TBA'
    """
    parsed = parse_airtime(airtime)
    if parsed is None:
        return NO_AIRTIME
    hour, minute = parsed
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return NO_AIRTIME
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def has_airtime(show: CanonicalShow) -> bool:
    return parse_airtime(show.airtime) is not None


def all_without_airtime(shows: Sequence[CanonicalShow]) -> bool:
    return all(not has_airtime(show) for show in shows)


def format_episode_info(show: CanonicalShow) -> str:
    """Format season/episode as "S01E05", leaving out parts that are zero."""
    result = ""
    if show.season > 0:
        result += f"S{show.season:02d}"
    if show.number > 0:
        result += f"E{show.number:02d}"
    return result


def format_episode_ranges(shows: Sequence[CanonicalShow]) -> str:
    """Collapse episodes of one show into ranges.

    Consecutive episode numbers within a season become "S01E01-03"; separate
    runs are joined with ", ".

    Examples:
        S01E01, S01E02, S01E03, S01E05 -> "S01E01-03, S01E05"
        S01E10, S02E01                 -> "S01E10, S02E01"
    """
    runs: list[tuple[int, int, int]] = []  # (season, first, last)
    for show in sort_episodes_by_number(shows):
        if runs and runs[-1][0] == show.season and show.number == runs[-1][2] + 1:
            season, first, _ = runs[-1]
            runs[-1] = (season, first, show.number)
        elif runs and runs[-1][0] == show.season and show.number == runs[-1][2]:
            continue  # duplicate episode
        else:
            runs.append((show.season, show.number, show.number))

    parts = []
    for season, first, last in runs:
        if first == last:
            parts.append(f"S{season:02d}E{first:02d}")
        else:
            parts.append(f"S{season:02d}E{first:02d}-{last:02d}")
    return ", ".join(parts)


def pad(text: str, width: int) -> str:
    """Left-align `text` in a column of `width`, truncating with an ellipsis."""
    if len(text) > width:
        return text[: max(width - 1, 0)] + "…"
    return text.ljust(width)
