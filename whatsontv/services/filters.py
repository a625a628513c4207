"""Show filters.

Each filter takes the shows and a list of accepted values and returns a new
list. An empty list of values disables the filter. Filters are independent,
so applying them in any order gives the same result.

Matching rules:
- type, genre: exact, case-sensitive
- network: exact after stripping country codes on both sides ("CBS" matches "CBS (US)")
- language: case-insensitive; shows without a language never match
"""
from __future__ import annotations

from collections.abc import Sequence

from whatsontv.models.shows import CanonicalShow, ShowOptions
from whatsontv.services.grouping import normalize_network_name


def filter_by_type(shows: Sequence[CanonicalShow], types: Sequence[str]) -> list[CanonicalShow]:
    if not types:
        return list(shows)
    wanted = set(types)
    return [show for show in shows if show.type in wanted]


def filter_by_network(shows: Sequence[CanonicalShow], networks: Sequence[str]) -> list[CanonicalShow]:
    if not networks:
        return list(shows)
    wanted = {normalize_network_name(network) for network in networks}
    return [show for show in shows if normalize_network_name(show.network) in wanted]


def filter_by_genre(shows: Sequence[CanonicalShow], genres: Sequence[str]) -> list[CanonicalShow]:
    if not genres:
        return list(shows)
    wanted = set(genres)
    return [show for show in shows if wanted.intersection(show.genres)]


def filter_by_language(shows: Sequence[CanonicalShow], languages: Sequence[str]) -> list[CanonicalShow]:
    if not languages:
        return list(shows)
    wanted = {language.lower() for language in languages}
    return [
        show for show in shows
        if show.language is not None and show.language.lower() in wanted
    ]


def apply_filters(shows: Sequence[CanonicalShow], options: ShowOptions) -> list[CanonicalShow]:
    """Apply every filter configured in `options` (type, network, genre, language)."""
    result = filter_by_type(shows, options.types)
    result = filter_by_network(result, options.networks)
    result = filter_by_genre(result, options.genres)
    return filter_by_language(result, options.languages)
