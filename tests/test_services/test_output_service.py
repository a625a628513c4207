"""Unit tests for the console and Slack output services."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from whatsontv.api_clients.slack_client import SlackClient
from whatsontv.formatters.slack_formatter import SlackShowFormatter
from whatsontv.formatters.text_formatter import TextShowFormatter
from whatsontv.models.shows import ShowOptions
from whatsontv.services.output_service import (
    NO_SHOWS_MESSAGE,
    SLACK_MAX_BLOCKS,
    ConsoleOutputService,
    SlackOutputService,
    debug_summary,
    format_display_date,
)
from whatsontv.services.show_service import TVShowService
from whatsontv.utils.exceptions import APIClientError, SlackDeliveryError

OPTIONS = ShowOptions(date="2025-03-14")


@pytest.fixture
def mock_show_service():
    service = MagicMock(spec=TVShowService)
    service.fetch_shows = AsyncMock(return_value=[])
    return service


@pytest.fixture
def mock_slack():
    slack = MagicMock(spec=SlackClient)
    slack.post_message = AsyncMock(return_value={"ok": True})
    return slack


class TestHelpers:

    def test_format_display_date(self):
        assert format_display_date("2025-03-14") == "Friday, March 14, 2025"
        assert format_display_date("2025-01-05") == "Sunday, January 5, 2025"

    def test_debug_summary(self, make_show):
        shows = [make_show(network="NBC"), make_show(network="ABC (US)"), make_show(network="ABC")]
        assert debug_summary(shows, "2025-03-14") == {
            "date": "2025-03-14",
            "networks": ["ABC", "NBC"],
            "total_shows": 3,
        }


class TestConsoleOutputService:
    """Tests for ConsoleOutputService.render."""

    def render(self, show_service, **kwargs):
        lines = []
        service = ConsoleOutputService(show_service, TextShowFormatter(), write=lines.append)
        asyncio.run(service.render(OPTIONS, **kwargs))
        return lines

    def test_no_shows(self, mock_show_service):
        lines = self.render(mock_show_service)
        assert lines == ["TV Schedule for Friday, March 14, 2025", "", NO_SHOWS_MESSAGE]

    def test_grouped_by_network(self, mock_show_service, make_show):
        mock_show_service.fetch_shows.return_value = [
            make_show(id=1, show_name="Late Show", network="NBC", airtime="23:35"),
            make_show(id=2, show_name="Morning", network="ABC", airtime="07:00"),
        ]
        lines = self.render(mock_show_service)

        assert lines[2] == "ABC:"
        assert "Morning" in lines[4]
        assert lines[5] == ""
        assert lines[6] == "NBC:"
        assert "Late Show" in lines[8]

    def test_time_sort_has_no_network_headers(self, mock_show_service, make_show):
        mock_show_service.fetch_shows.return_value = [
            make_show(id=1, show_name="Late Show", network="NBC", airtime="23:35"),
            make_show(id=2, show_name="Morning", network="ABC", airtime="07:00"),
        ]
        lines = self.render(mock_show_service, sort_by_time=True)

        assert len(lines) == 4
        assert lines[2].startswith("07:00")
        assert lines[3].startswith("23:35")

    def test_debug_lines(self, mock_show_service, make_show):
        mock_show_service.fetch_shows.return_value = [make_show(network="HBO")]
        lines = self.render(mock_show_service, debug=True)

        assert "Date queried: 2025-03-14" in lines
        assert "Available networks: HBO" in lines
        assert "Total shows: 1" in lines

    def test_passes_options_through(self, mock_show_service):
        self.render(mock_show_service)
        mock_show_service.fetch_shows.assert_awaited_once_with(OPTIONS)


class TestSlackOutputService:
    """Tests for SlackOutputService.render."""

    def render(self, show_service, slack, **kwargs):
        service = SlackOutputService(show_service, SlackShowFormatter(), slack, channel="C123")
        return asyncio.run(service.render(OPTIONS, **kwargs))

    def test_header_then_no_shows_message(self, mock_show_service, mock_slack):
        self.render(mock_show_service, mock_slack)

        calls = mock_slack.post_message.await_args_list
        assert len(calls) == 2
        assert calls[0].kwargs["text"] == "📺 TV Shows for Friday, March 14, 2025"
        assert calls[1].kwargs["text"] == NO_SHOWS_MESSAGE
        assert all(call.args[0] == "C123" for call in calls)

    def test_blocks_chunked(self, mock_show_service, mock_slack, make_show):
        # 60 shows on distinct networks: header (2) + 60 * (header + row) + 59 dividers + footer
        mock_show_service.fetch_shows.return_value = [
            make_show(id=i, show_name=f"Show {i}", network=f"Net {i:02d}") for i in range(60)
        ]
        self.render(mock_show_service, mock_slack)

        block_calls = mock_slack.post_message.await_args_list[1:]
        sizes = [len(call.kwargs["blocks"]) for call in block_calls]
        assert all(size <= SLACK_MAX_BLOCKS for size in sizes)
        assert sum(sizes) == 2 + 60 * 2 + 59 + 1

    def test_debug_message(self, mock_show_service, mock_slack, make_show):
        mock_show_service.fetch_shows.return_value = [make_show(network="HBO")]
        self.render(mock_show_service, mock_slack, debug=True)

        last = mock_slack.post_message.await_args_list[-1]
        assert "Total Shows: 1" in last.kwargs["text"]

    def test_fetch_error_reported_and_raised(self, mock_show_service, mock_slack):
        mock_show_service.fetch_shows.side_effect = APIClientError("TVMaze down")

        with pytest.raises(APIClientError):
            self.render(mock_show_service, mock_slack)

        mock_slack.post_message.assert_awaited_once_with("C123", text="Error fetching TV shows: TVMaze down")

    def test_error_report_failure_keeps_original_error(self, mock_show_service, mock_slack):
        mock_show_service.fetch_shows.side_effect = APIClientError("TVMaze down")
        mock_slack.post_message.side_effect = SlackDeliveryError("channel_not_found", channel="C123")

        with pytest.raises(APIClientError):
            self.render(mock_show_service, mock_slack)
