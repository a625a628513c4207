"""Async base API client shared by the TVMaze and Slack clients.

Each client owns one httpx.AsyncClient, closed with `aclose()` or by using
the client as an async context manager. Requests are rate limited per
client, logged as `api_request` / `api_response`, and failures are mapped
onto the WhatsOnTV exception hierarchy.

A request is attempted `max_retries` times (once by default). Between
attempts the client waits 1s, 2s, 4s..., or the server's Retry-After
for 429 responses.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import structlog

from whatsontv.utils.exceptions import (
    APIClientError,
    APIRateLimitError,
    APITimeoutError,
)

logger = structlog.get_logger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
DEFAULT_RETRY_AFTER = 2.0


def _retry_after(response: httpx.Response) -> float:
    """Seconds from a Retry-After header; HTTP-date values fall back to the default."""
    try:
        return float(response.headers.get("Retry-After", DEFAULT_RETRY_AFTER))
    except ValueError:
        return DEFAULT_RETRY_AFTER


class BaseAPIClient:
    """Base class for external API clients.

    Args:
        base_url: The API's base URL.
        rate_limit: Minimum seconds between consecutive requests.
        timeout: HTTP request timeout in seconds.
        max_retries: Attempts per request (1 = no retry).
        headers: Extra default headers (e.g. Authorization).
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str,
        rate_limit: float = 0.0,
        timeout: float = 30,
        max_retries: int = 1,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._rate_limit = rate_limit
        self._max_retries = max(1, max_retries)
        self._timeout = timeout
        self._last_request_time: float = 0.0
        self._rate_lock = asyncio.Lock()
        self._client_name = self.__class__.__name__

        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout, connect=10),
            headers={
                "Accept": "application/json",
                "User-Agent": "WhatsOnTV/1.0 (tv-schedule)",
                **(headers or {}),
            },
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    # ── Public API ────────────────────────────────────────────────────

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """GET `endpoint`; None-valued params are left out of the query string.

        Returns:
            Decoded JSON for JSON responses, the body text otherwise.

        Raises:
            APIClientError: HTTP error status or transport failure.
            APIRateLimitError: 429 on the final attempt.
            APITimeoutError: Timeout on the final attempt.
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        return await self._request_with_retry("GET", endpoint, params=query)

    async def post(self, endpoint: str, json: dict[str, Any] | None = None) -> Any:
        """POST a JSON body to `endpoint`; same return value and errors as `get`."""
        return await self._request_with_retry("POST", endpoint, json=json)

    # ── Internal Methods ──────────────────────────────────────────────

    async def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        for attempt in range(1, self._max_retries + 1):
            final = attempt == self._max_retries

            try:
                response = await self._send(method, endpoint, attempt, params=params, json=json)
            except httpx.TimeoutException as e:
                if final:
                    raise APITimeoutError(client_name=self._client_name, timeout=self._timeout) from e
                await self._pause("timeout_retry", attempt, endpoint=endpoint)
                continue
            except httpx.HTTPError as e:
                if final:
                    raise APIClientError(
                        message=f"{self._client_name}: {type(e).__name__} for {endpoint}: {e}",
                        client_name=self._client_name,
                    ) from e
                await self._pause("http_error_retry", attempt, endpoint=endpoint, error=str(e))
                continue

            status = response.status_code
            if status in RETRYABLE_STATUS_CODES and not final:
                delay = _retry_after(response) if status == 429 else None
                await self._pause("retryable_status", attempt, delay=delay, endpoint=endpoint, status=status)
                continue
            if status == 429:
                raise APIRateLimitError(client_name=self._client_name, retry_after=_retry_after(response))
            if status >= 400:
                raise APIClientError(
                    message=f"{self._client_name}: HTTP {status} for {endpoint}",
                    client_name=self._client_name,
                    upstream_status=status,
                )
            return self._decode(response)

        raise APIClientError(
            message=f"{self._client_name}: no attempt made for {endpoint}",
            client_name=self._client_name,
        )

    async def _send(self, method: str, endpoint: str, attempt: int, **kwargs: Any) -> httpx.Response:
        await self._rate_limit_wait()
        logger.info("api_request", client=self._client_name, method=method, endpoint=endpoint, attempt=attempt)

        start = time.monotonic()
        response = await self._client.request(method, endpoint, **kwargs)
        logger.info(
            "api_response",
            client=self._client_name,
            endpoint=endpoint,
            status=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000),
        )
        return response

    async def _pause(self, event: str, attempt: int, delay: float | None = None, **fields: Any) -> None:
        """Log a retry and wait before the next attempt."""
        if delay is None:
            delay = 2 ** (attempt - 1)
        logger.warning(event, client=self._client_name, attempt=attempt, delay=delay, **fields)
        await asyncio.sleep(delay)

    def _decode(self, response: httpx.Response) -> Any:
        if "json" not in response.headers.get("content-type", ""):
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise APIClientError(
                message=f"{self._client_name}: invalid JSON body from {response.request.url.path}",
                client_name=self._client_name,
                upstream_status=response.status_code,
            ) from e

    async def _rate_limit_wait(self) -> None:
        """Keep at least `rate_limit` seconds between requests from this client."""
        if self._rate_limit <= 0:
            return

        async with self._rate_lock:
            wait = self._rate_limit - (time.monotonic() - self._last_request_time)
            if wait > 0:
                logger.debug("rate_limit_wait", client=self._client_name, sleep_seconds=round(wait, 3))
                await asyncio.sleep(wait)
            self._last_request_time = time.monotonic()
