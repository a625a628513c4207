"""Daily scheduler for recurring Slack notifications.

Runs a job every day at a fixed local time (HH:MM). A failing run is
logged and the loop waits for the next day; it never stops the scheduler.
"""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

import structlog

from whatsontv.utils.exceptions import WhatsOnTVError

logger = structlog.get_logger(__name__)


def seconds_until(at: str, now: datetime) -> float:
    """Seconds from `now` until the next occurrence of `at` (HH:MM).

    If `at` is exactly now, the next run is tomorrow.
    """
    hour, minute = (int(part) for part in at.split(":"))
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


async def run_daily(
    job: Callable[[], Awaitable[object]],
    at: str,
    now: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    max_runs: int | None = None,
) -> None:
    """Run `job` every day at `at` until cancelled (or `max_runs` runs).

    Args:
        job: Coroutine factory executed at each tick.
        at: Local time of day, HH:MM.
        now: Clock, injectable for tests.
        sleep: Sleep function, injectable for tests.
        max_runs: Stop after this many runs; None runs forever.
    """
    runs = 0
    logger.info("scheduler_started", at=at)
    while max_runs is None or runs < max_runs:
        delay = seconds_until(at, now())
        logger.info("scheduler_waiting", at=at, seconds=round(delay))
        await sleep(delay)

        runs += 1
        try:
            await job()
            logger.info("scheduled_run_completed", run=runs)
        except WhatsOnTVError as e:
            logger.error("scheduled_run_failed", run=runs, error=e.message)
