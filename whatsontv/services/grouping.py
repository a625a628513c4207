"""Grouping and sorting of canonical shows.

Network grouping keys on the network name with any trailing country code
removed, so "Hulu (JP)" and "Hulu" land in the same group. The shows
themselves keep their original network string.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Optional

from whatsontv.models.shows import UNKNOWN_NETWORK, CanonicalShow, NetworkGroups

_COUNTRY_SUFFIX = re.compile(r"\s*\([A-Za-z]{2}\)\s*$")


def normalize_network_name(name: Optional[str]) -> str:
    """Strip a trailing " (XX)" country code and surrounding whitespace.

    Examples:
        >>> normalize_network_name("CBS (US)")
        'CBS'
        >>> normalize_network_name("  Hulu ")
        'Hulu'
        >>> normalize_network_name("")
        'Unknown Network'
    """
    if not name:
        return UNKNOWN_NETWORK
    stripped = _COUNTRY_SUFFIX.sub("", name).strip()
    return stripped or UNKNOWN_NETWORK


def group_shows_by_network(shows: Iterable[CanonicalShow]) -> NetworkGroups:
    """Group shows under their normalized network name.

    Groups appear in order of first occurrence; shows keep input order
    within a group.
    """
    groups: NetworkGroups = {}
    for show in shows:
        key = normalize_network_name(show.network)
        groups.setdefault(key, []).append(show)
    return groups


def group_shows_by_show_id(shows: Iterable[CanonicalShow]) -> dict[int, list[CanonicalShow]]:
    """Group episodes belonging to the same show."""
    groups: dict[int, list[CanonicalShow]] = {}
    for show in shows:
        groups.setdefault(show.show_id, []).append(show)
    return groups


def parse_airtime(airtime: Optional[str]) -> tuple[int, int] | None:
    """Parse "H:MM"/"HH:MM" into (hour, minute), None when absent or invalid."""
    if not airtime or not airtime.strip():
        return None
    parts = airtime.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def _time_sort_key(show: CanonicalShow) -> tuple[int, int, int, str, str]:
    parsed = parse_airtime(show.airtime)
    if parsed is None:
        return (1, 0, 0, show.show_name, show.name)
    hour, minute = parsed
    return (0, hour, minute, show.show_name, show.name)


def sort_shows_by_time(shows: Iterable[CanonicalShow]) -> list[CanonicalShow]:
    """Sort by airtime, shows without one last; ties by show name, then title.

    Times compare numerically, so "9:05" sorts before "10:00".
    """
    return sorted(shows, key=_time_sort_key)


def sort_episodes_by_number(shows: Iterable[CanonicalShow]) -> list[CanonicalShow]:
    """Sort episodes by season, then episode number."""
    return sorted(shows, key=lambda show: (show.season, show.number))
