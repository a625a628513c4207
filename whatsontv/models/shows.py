"""Pydantic models for the internal show representation and fetch options.

`CanonicalShow` is the single shape every upstream schedule item is
normalized into, regardless of whether it came from the network schedule
or the web (streaming) schedule. Everything downstream of normalization
(filters, grouping, formatters) works on this model only.
"""
from __future__ import annotations

from datetime import date as date_type
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_NETWORK = "Unknown Network"
UNKNOWN_TYPE = "unknown"

FetchSource = Literal["network", "web", "all"]


def today_iso() -> str:
    """Return today's date in the local timezone as YYYY-MM-DD."""
    return date_type.today().isoformat()


# ══════════════════════════════════════════════════════════════════════
# Domain Model
# ══════════════════════════════════════════════════════════════════════

class CanonicalShow(BaseModel):
    """One scheduled episode of a show, normalized from TVMaze."""

    model_config = ConfigDict(frozen=True)

    id: int = 0                         # show id
    name: str = ""                      # episode title
    show_name: str = ""
    season: int = 0
    number: int = 0
    airtime: Optional[str] = None       # HH:MM, None/"" means TBA
    network: str = UNKNOWN_NETWORK      # "<Name> (<CC>)" or "<Name>"
    type: str = UNKNOWN_TYPE
    language: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    summary: Optional[str] = None       # may contain upstream HTML
    show_id: int = 0
    episode_id: int = 0

    @field_validator("network", mode="before")
    @classmethod
    def default_network(cls, v: Any) -> Any:
        """A show always has a displayable network."""
        if v is None or v == "":
            return UNKNOWN_NETWORK
        return v

    @field_validator("genres", mode="before")
    @classmethod
    def default_genres(cls, v: Any) -> Any:
        return [] if v is None else v


NetworkGroups = dict[str, list[CanonicalShow]]


# ══════════════════════════════════════════════════════════════════════
# Fetch Options
# ══════════════════════════════════════════════════════════════════════

class ShowOptions(BaseModel):
    """Criteria for one schedule fetch.

    Every field is optional; list filters left empty disable that filter.
    """

    date: str = Field(default_factory=today_iso, description="Schedule date (YYYY-MM-DD)")
    country: str = Field(default="US", description="ISO 3166-1 country code for the network schedule")
    types: list[str] = Field(default_factory=list)
    networks: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    fetch_source: FetchSource = "all"

    @field_validator("date", mode="before")
    @classmethod
    def default_date(cls, v: Any) -> Any:
        """Blank dates mean today."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return today_iso()
        if isinstance(v, date_type):
            return v.isoformat()
        return v.strip() if isinstance(v, str) else v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        try:
            date_type.fromisoformat(v)
        except ValueError as e:
            raise ValueError(f"date must be YYYY-MM-DD, got '{v}'") from e
        return v

    @field_validator("country", mode="before")
    @classmethod
    def default_country(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "US"
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("types", "networks", "genres", "languages", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        """Accept None, a comma-separated string, or a list of strings."""
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return [str(item).strip() for item in v if str(item).strip()]

    @field_validator("fetch_source", mode="before")
    @classmethod
    def coerce_fetch_source(cls, v: Any) -> str:
        """Case-insensitive; "tv" means network, anything unknown means all."""
        if not isinstance(v, str):
            return "all"
        normalized = v.strip().lower()
        if normalized == "tv":
            return "network"
        if normalized in ("network", "web"):
            return normalized
        return "all"
