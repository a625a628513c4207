"""Shared pytest fixtures for the WhatsOnTV test suite.

Provides reusable fixtures for:
- CanonicalShow factories
- Raw TVMaze network / web schedule items
- Converting a CanonicalShow back into a raw schedule item
- Quiet structlog configuration
- A clean environment for Settings
"""
import re

import pytest
import structlog

from whatsontv.config import Settings
from whatsontv.models.shows import UNKNOWN_NETWORK, CanonicalShow

_NETWORK_WITH_CODE = re.compile(r"^(?P<name>.+) \((?P<code>[A-Za-z]{2})\)$")


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log output out of test runs; warnings and below are dropped."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(50),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_show():
    """Factory for CanonicalShow with sensible defaults."""
    def _make(**overrides) -> CanonicalShow:
        fields = {
            "id": 100,
            "name": "Pilot",
            "show_name": "Show A",
            "season": 1,
            "number": 1,
            "airtime": "20:00",
            "network": "CBS (US)",
            "type": "Scripted",
            "language": "English",
            "genres": ["Drama"],
            "show_id": 100,
            "episode_id": 1,
        }
        fields.update(overrides)
        if "id" in overrides and "show_id" not in overrides:
            fields["show_id"] = overrides["id"]
        return CanonicalShow(**fields)
    return _make


@pytest.fixture
def network_item():
    """Factory for a raw /schedule item (show details under `show`)."""
    def _make(episode_id=1, name="Pilot", season=1, number=1, airtime="20:00", show=None, **show_fields):
        show_data = {
            "id": 100,
            "name": "Show A",
            "type": "Scripted",
            "language": "English",
            "genres": ["Drama"],
            "network": {"name": "CBS", "country": {"code": "US"}},
        }
        show_data.update(show or {})
        show_data.update(show_fields)
        return {
            "id": episode_id,
            "name": name,
            "season": season,
            "number": number,
            "airtime": airtime,
            "show": show_data,
        }
    return _make


@pytest.fixture
def web_item():
    """Factory for a raw /schedule/web item (show details under `_embedded.show`)."""
    def _make(episode_id=2, name="Episode 1", season=1, number=1, airtime="", show=None, **show_fields):
        show_data = {
            "id": 200,
            "name": "Stream Show",
            "type": "Reality",
            "language": "English",
            "genres": ["Comedy"],
            "network": None,
            "webChannel": {"name": "Netflix", "country": None},
        }
        show_data.update(show or {})
        show_data.update(show_fields)
        return {
            "id": episode_id,
            "name": name,
            "season": season,
            "number": number,
            "airtime": airtime,
            "_embedded": {"show": show_data},
        }
    return _make


@pytest.fixture
def denormalize():
    """Build a raw network schedule item that represents a CanonicalShow."""
    def _denormalize(show: CanonicalShow) -> dict:
        show_data = {
            "id": show.show_id,
            "name": show.show_name,
            "type": show.type,
            "genres": list(show.genres),
        }
        if show.language is not None:
            show_data["language"] = show.language
        if show.summary is not None:
            show_data["summary"] = show.summary
        if show.network != UNKNOWN_NETWORK:
            match = _NETWORK_WITH_CODE.match(show.network)
            if match:
                show_data["network"] = {"name": match["name"], "country": {"code": match["code"]}}
            else:
                show_data["network"] = {"name": show.network, "country": None}

        raw = {
            "id": show.episode_id,
            "name": show.name,
            "season": show.season,
            "number": show.number,
            "show": show_data,
        }
        if show.airtime is not None:
            raw["airtime"] = show.airtime
        return raw
    return _denormalize


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no WhatsOnTV variables set and no .env file in reach."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
