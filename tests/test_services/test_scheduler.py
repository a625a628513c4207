"""Unit tests for the daily scheduler."""
import asyncio
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from whatsontv.services.scheduler import run_daily, seconds_until
from whatsontv.utils.exceptions import APIClientError


class TestSecondsUntil:

    @pytest.mark.parametrize("at, now, expected", [
        ("09:00", datetime(2025, 3, 14, 8, 0), 3600),
        ("09:00", datetime(2025, 3, 14, 8, 59, 30), 30),
        ("09:00", datetime(2025, 3, 14, 9, 0), 24 * 3600),
        ("09:00", datetime(2025, 3, 14, 10, 0), 23 * 3600),
        ("0:15", datetime(2025, 3, 14, 23, 45), 30 * 60),
    ])
    def test_next_occurrence(self, at, now, expected):
        assert seconds_until(at, now) == expected


class TestRunDaily:

    def test_runs_job_after_sleeping(self):
        job = AsyncMock()
        sleep = AsyncMock()

        asyncio.run(run_daily(
            job, "09:00", now=lambda: datetime(2025, 3, 14, 8, 0), sleep=sleep, max_runs=2,
        ))

        assert job.await_count == 2
        assert [call.args[0] for call in sleep.await_args_list] == [3600, 3600]

    def test_failed_run_does_not_stop_scheduler(self):
        job = AsyncMock(side_effect=[APIClientError("down"), None])

        asyncio.run(run_daily(
            job, "09:00", now=lambda: datetime(2025, 3, 14, 8, 0), sleep=AsyncMock(), max_runs=2,
        ))

        assert job.await_count == 2
