"""Centralized configuration.

Two layers:
- `Settings`: runtime settings from environment variables / `.env`
  (pydantic-settings): API URLs, HTTP behaviour, logging, Slack credentials.
- `AppConfig`: user preferences from a JSON config file (default filters,
  country, notification time, Slack channel), merged under CLI arguments.

Usage:
    from whatsontv.config import get_settings, load_app_config

    settings = get_settings()  # cached singleton
    app_config = load_app_config(settings.CONFIG_FILE)
"""
from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from whatsontv.models.shows import ShowOptions
from whatsontv.utils.exceptions import ConfigurationError

_HH_MM = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


def _validate_hh_mm(v: str) -> str:
    v = v.strip()
    if not _HH_MM.match(v):
        raise ValueError(f"time must be HH:MM (24-hour), got '{v}'")
    return v


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables / .env file.

    Nothing is required: the console CLI runs with defaults. Slack delivery
    needs SLACK_TOKEN and a channel (here or in the config file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── TV Maze ───────────────────────────────────────────────────────
    TVMAZE_BASE_URL: str = Field(default="https://api.tvmaze.com", description="TV Maze API base URL")
    TVMAZE_RATE_LIMIT: float = Field(default=0.0, ge=0.0, description="Min delay between TVMaze requests (sec)")

    # ── HTTP Client ───────────────────────────────────────────────────
    HTTP_TIMEOUT: float = Field(default=30, gt=0, le=120, description="HTTP request timeout (seconds)")
    HTTP_MAX_RETRIES: int = Field(default=1, ge=1, le=10, description="Attempts per request (1 = no retry)")

    # ── Logging ───────────────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="WARNING", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    LOG_FORMAT: str = Field(default="console", description="Log output format ('json' or 'console')")

    # ── Slack ─────────────────────────────────────────────────────────
    SLACK_TOKEN: str = Field(default="", description="Slack bot token (xoxb-...)")
    SLACK_CHANNEL: str = Field(default="", description="Slack channel ID; overrides the config file")
    SLACK_USERNAME: str = Field(default="", description="Display name for Slack messages; overrides the config file")
    SLACK_BASE_URL: str = Field(default="https://slack.com/api", description="Slack Web API base URL")

    # ── Scheduling / Files ────────────────────────────────────────────
    NOTIFICATION_TIME: Optional[str] = Field(default=None, description="Daily Slack run time (HH:MM); overrides the config file")
    CONFIG_FILE: str = Field(default="config.json", description="Path to the JSON config file")
    APP_CONFIG: Optional[str] = Field(default=None, description="Inline JSON show options (Lambda)")

    # ── Validators ────────────────────────────────────────────────────

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        v = v.upper().strip()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @field_validator("TVMAZE_BASE_URL", "SLACK_BASE_URL")
    @classmethod
    def validate_urls(cls, v: str) -> str:
        """Ensure base URLs don't have trailing slashes."""
        return v.rstrip("/")

    @field_validator("NOTIFICATION_TIME")
    @classmethod
    def validate_notification_time(cls, v: Optional[str]) -> Optional[str]:
        return _validate_hh_mm(v) if v else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Uses `lru_cache` so the `.env` file is only read once.
    """
    return Settings()


# ══════════════════════════════════════════════════════════════════════
# JSON config file
# ══════════════════════════════════════════════════════════════════════

class SlackConfig(BaseModel):
    """`slack` section of config.json."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: str = ""
    channel_id: str = Field(default="", alias="channelId")
    username: str = "WhatsOnTV"


class AppConfig(BaseModel):
    """User preferences from config.json; unknown keys are ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    country: str = "US"
    types: list[str] = Field(default_factory=list)
    networks: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    notification_time: str = Field(default="09:00", alias="notificationTime")
    slack: SlackConfig = Field(default_factory=SlackConfig)

    @field_validator("notification_time")
    @classmethod
    def validate_notification_time(cls, v: str) -> str:
        return _validate_hh_mm(v)


def load_app_config(path: str | Path | None) -> AppConfig:
    """Load config.json, falling back to defaults when the file doesn't exist.

    Raises:
        ConfigurationError: If the file exists but is not valid JSON or
            doesn't match the expected shape.
    """
    if not path:
        return AppConfig()
    config_path = Path(path)
    if not config_path.is_file():
        return AppConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


def merge_show_options(cli_values: dict[str, Any], app_config: AppConfig) -> ShowOptions:
    """Build ShowOptions: non-empty CLI values win over config file values.

    Args:
        cli_values: date, country, types, networks, genres, languages,
            fetch_source as given on the command line (None/empty = unset).
        app_config: Loaded config file.
    """
    def pick(key: str, fallback: Any) -> Any:
        value = cli_values.get(key)
        return value if value else fallback

    try:
        return ShowOptions(
            date=pick("date", None),
            country=pick("country", app_config.country),
            types=pick("types", app_config.types),
            networks=pick("networks", app_config.networks),
            genres=pick("genres", app_config.genres),
            languages=pick("languages", app_config.languages),
            fetch_source=pick("fetch_source", "all"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid show options: {e}") from e


def show_options_from_json(raw: str | None) -> ShowOptions:
    """Parse inline JSON show options (the Lambda APP_CONFIG variable).

    Accepts both snake_case and the camelCase `fetchSource` key.
    """
    if not raw or not raw.strip():
        return ShowOptions()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"APP_CONFIG is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError("APP_CONFIG must be a JSON object")
    if "fetchSource" in data and "fetch_source" not in data:
        data["fetch_source"] = data.pop("fetchSource")
    try:
        return ShowOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid APP_CONFIG: {e}") from e
