"""WhatsOnTV: TV schedules from TVMaze, in the terminal or in Slack.

This is the main package. The factory functions below build the clients
and services from validated settings; entry points (CLI, scheduler,
Lambda handler) call them once per run so no HTTP client outlives the
event loop it was created in.
"""
from __future__ import annotations

from dataclasses import dataclass

from whatsontv.api_clients.slack_client import SlackClient
from whatsontv.api_clients.tvmaze_client import TVMazeClient
from whatsontv.config import AppConfig, Settings
from whatsontv.utils.exceptions import ConfigurationError

__version__ = "1.0.0"


@dataclass(frozen=True)
class SlackTarget:
    """Resolved Slack destination."""
    token: str
    channel: str
    username: str


def create_tvmaze_client(settings: Settings) -> TVMazeClient:
    """Build a TVMazeClient from settings."""
    return TVMazeClient(
        base_url=settings.TVMAZE_BASE_URL,
        rate_limit=settings.TVMAZE_RATE_LIMIT,
        timeout=settings.HTTP_TIMEOUT,
        max_retries=settings.HTTP_MAX_RETRIES,
    )


def resolve_slack_target(settings: Settings, app_config: AppConfig) -> SlackTarget:
    """Combine environment and config file Slack settings; environment wins.

    Raises:
        ConfigurationError: If no token or no channel is configured.
    """
    token = settings.SLACK_TOKEN or app_config.slack.token
    channel = settings.SLACK_CHANNEL or app_config.slack.channel_id
    username = settings.SLACK_USERNAME or app_config.slack.username

    missing = [name for name, value in (("SLACK_TOKEN", token), ("SLACK_CHANNEL", channel)) if not value]
    if missing:
        raise ConfigurationError(f"Slack delivery requires {', '.join(missing)}")
    return SlackTarget(token=token, channel=channel, username=username)


def create_slack_client(settings: Settings, target: SlackTarget) -> SlackClient:
    """Build a SlackClient for a resolved target."""
    return SlackClient(
        token=target.token,
        username=target.username,
        base_url=settings.SLACK_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        max_retries=settings.HTTP_MAX_RETRIES,
    )
