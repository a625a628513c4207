"""Normalization of raw TVMaze schedule items into CanonicalShow records.

TVMaze returns two payload shapes:
- /schedule       network items, show details under `show`
- /schedule/web   web (streaming) items, show details under `_embedded.show`

`classify_raw_item` resolves which shape an item has, then each canonical
field is produced by an ordered list of extractors: the first extractor
that returns something other than None wins.

Normalization never raises. An item that cannot be normalized is dropped
(None) and a warning is logged.
"""
from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, TypeVar

import structlog

from whatsontv.models.shows import UNKNOWN_NETWORK, UNKNOWN_TYPE, CanonicalShow

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Fields that make a bare mapping worth treating as show details
KNOWN_FIELDS = frozenset({
    "id", "name", "season", "number", "airtime", "summary",
    "type", "language", "genres", "network", "webChannel",
})

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


class ScheduleItemKind(str, Enum):
    WEB = "web"
    NETWORK = "network"
    BARE = "bare"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedItem:
    """A raw schedule item split into its episode envelope and show details."""
    kind: ScheduleItemKind
    envelope: Mapping[str, Any] = field(default_factory=dict)
    show: Mapping[str, Any] = field(default_factory=dict)


UNRECOGNIZED = ClassifiedItem(kind=ScheduleItemKind.UNRECOGNIZED)


# ── Classification ────────────────────────────────────────────────────

def classify_raw_item(raw: Any) -> ClassifiedItem:
    """Decide which upstream shape `raw` has.

    Args:
        raw: One item from a schedule response, of untrusted shape.

    Returns:
        ClassifiedItem. For WEB and NETWORK items `show` holds the nested
        show details; for BARE items the item itself is both envelope and
        show details.
    """
    if not isinstance(raw, Mapping):
        return UNRECOGNIZED

    for embedded_key in ("_embedded", "embedded"):
        embedded = raw.get(embedded_key)
        if isinstance(embedded, Mapping) and isinstance(embedded.get("show"), Mapping):
            return ClassifiedItem(ScheduleItemKind.WEB, raw, embedded["show"])

    show = raw.get("show")
    if isinstance(show, Mapping):
        return ClassifiedItem(ScheduleItemKind.NETWORK, raw, show)

    if KNOWN_FIELDS.intersection(raw.keys()):
        return ClassifiedItem(ScheduleItemKind.BARE, raw, raw)

    return UNRECOGNIZED


# ── Extractors ────────────────────────────────────────────────────────

def first_present(*extractors: Callable[[], Optional[T]], default: T) -> T:
    """Return the first extractor result that is not None, else `default`."""
    for extract in extractors:
        value = extract()
        if value is not None:
            return value
    return default


def coerce_int(value: Any) -> int:
    """Coerce a numeric or numeric-string value to int, 0 when impossible.

    Integers pass through unchanged (no clamping). Strings are parsed like
    JavaScript's parseInt: an optional sign and leading digits.

    Examples:
        >>> coerce_int("-1")
        -1
        >>> coerce_int("12abc")
        12
        >>> coerce_int("abc")
        0
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else 0
    return 0


def optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def usable_name(value: Any) -> Optional[str]:
    """A name is usable only when it is a non-empty string."""
    return value if isinstance(value, str) and value else None


def channel_display_name(channel: Any) -> Optional[str]:
    """Format a network/webChannel object as "Name (CC)" or "Name".

    Returns None when the object is missing or has no usable name.
    """
    if not isinstance(channel, Mapping):
        return None
    name = usable_name(channel.get("name"))
    if name is None:
        return None
    country = channel.get("country")
    code = usable_name(country.get("code")) if isinstance(country, Mapping) else None
    return f"{name} ({code})" if code else name


def string_list(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


# ── Normalization ─────────────────────────────────────────────────────

def _build_show(item: ClassifiedItem) -> CanonicalShow:
    envelope, show = item.envelope, item.show

    show_id = coerce_int(show.get("id"))
    episode_id = 0 if item.kind is ScheduleItemKind.BARE else coerce_int(envelope.get("id"))
    show_name = usable_name(show.get("name")) or ""

    return CanonicalShow(
        id=show_id,
        name=first_present(
            lambda: usable_name(envelope.get("name")),
            lambda: usable_name(show.get("name")),
            default="",
        ),
        show_name=show_name,
        season=coerce_int(envelope.get("season")),
        number=coerce_int(envelope.get("number")),
        airtime=optional_str(envelope.get("airtime")),
        network=first_present(
            lambda: channel_display_name(show.get("network")),
            lambda: channel_display_name(show.get("webChannel")),
            default=UNKNOWN_NETWORK,
        ),
        type=first_present(lambda: optional_str(show.get("type")), default=UNKNOWN_TYPE),
        language=optional_str(show.get("language")),
        genres=first_present(lambda: string_list(show.get("genres")), default=[]),
        summary=first_present(
            lambda: optional_str(show.get("summary")),
            lambda: optional_str(envelope.get("summary")),
            default=None,
        ),
        show_id=show_id,
        episode_id=episode_id,
    )


def normalize_schedule_item(raw: Any) -> CanonicalShow | None:
    """Normalize one raw schedule item.

    Args:
        raw: A network item, web item, bare show mapping, or garbage.

    Returns:
        A fully populated CanonicalShow, or None when the item is not a
        mapping, carries no recognizable fields, or fails during access.
    """
    try:
        item = classify_raw_item(raw)
        if item.kind is ScheduleItemKind.UNRECOGNIZED:
            return None
        return _build_show(item)
    except Exception as e:
        logger.warning(
            "schedule_item_normalization_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return None


def normalize_schedule(items: Iterable[Any]) -> list[CanonicalShow]:
    """Normalize items in order, dropping those that cannot be normalized."""
    shows: list[CanonicalShow] = []
    dropped = 0
    for raw in items:
        show = normalize_schedule_item(raw)
        if show is None:
            dropped += 1
            continue
        shows.append(show)

    if dropped:
        logger.warning("schedule_items_dropped", dropped=dropped, kept=len(shows))
    return shows
