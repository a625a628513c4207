"""Custom exception hierarchy for WhatsOnTV.

All application-specific exceptions inherit from WhatsOnTVError,
so entry points (CLI, scheduler, Lambda handler) can handle them uniformly.

Hierarchy:
    WhatsOnTVError (base)
    ├── APIClientError          Upstream HTTP failures (TVMaze, Slack)
    │   ├── APIRateLimitError   429 Too Many Requests
    │   └── APITimeoutError     Request timeout
    ├── SlackDeliveryError      Slack API answered with ok=false
    └── ConfigurationError      Invalid config file or settings
"""
from __future__ import annotations


class WhatsOnTVError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(self.message)


# ── API Client Errors ─────────────────────────────────────────────────

class APIClientError(WhatsOnTVError):
    """Raised when an external API call fails."""

    def __init__(
        self,
        message: str,
        client_name: str = "unknown",
        upstream_status: int | None = None,
    ) -> None:
        self.client_name = client_name
        self.upstream_status = upstream_status
        super().__init__(message)


class APIRateLimitError(APIClientError):
    """Raised when an external API returns 429 Too Many Requests."""

    def __init__(self, client_name: str, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(
            message=f"{client_name} API rate limit exceeded. Try again shortly.",
            client_name=client_name,
            upstream_status=429,
        )


class APITimeoutError(APIClientError):
    """Raised when an external API request times out."""

    def __init__(self, client_name: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            message=f"{client_name} API request timed out after {timeout}s.",
            client_name=client_name,
        )


# ── Slack ─────────────────────────────────────────────────────────────

class SlackDeliveryError(WhatsOnTVError):
    """Raised when Slack accepts the request but rejects the message."""

    def __init__(self, error: str, channel: str | None = None) -> None:
        self.error = error
        self.channel = channel
        super().__init__(f"Slack rejected message for channel '{channel}': {error}")


# ── Configuration ─────────────────────────────────────────────────────

class ConfigurationError(WhatsOnTVError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, exit_code=2)
