"""Unit tests for the shared formatting helpers."""
import pytest

from whatsontv.utils.formatting import (
    all_without_airtime,
    format_episode_info,
    format_episode_ranges,
    format_time,
    pad,
)


class TestFormatTime:

    @pytest.mark.parametrize("airtime, expected", [
        ("20:00", "8:00 PM"),
        ("00:30", "12:30 AM"),
        ("12:00", "12:00 PM"),
        ("9:05", "9:05 AM"),
        ("23:59", "11:59 PM"),
        ("", "TBA"),
        (None, "TBA"),
        ("25:00", "TBA"),
        ("noon", "TBA"),
    ])
    def test_format(self, airtime, expected):
        assert format_time(airtime) == expected


class TestEpisodeInfo:

    @pytest.mark.parametrize("season, number, expected", [
        (1, 5, "S01E05"),
        (12, 104, "S12E104"),
        (0, 3, "E03"),
        (2, 0, "S02"),
        (0, 0, ""),
    ])
    def test_format_episode_info(self, make_show, season, number, expected):
        assert format_episode_info(make_show(season=season, number=number)) == expected

    def test_ranges(self, make_show):
        shows = [make_show(season=1, number=n) for n in (5, 2, 1, 3)]
        assert format_episode_ranges(shows) == "S01E01-03, S01E05"

    def test_ranges_across_seasons(self, make_show):
        shows = [make_show(season=2, number=1), make_show(season=1, number=10)]
        assert format_episode_ranges(shows) == "S01E10, S02E01"

    def test_duplicate_episodes_counted_once(self, make_show):
        shows = [make_show(number=1), make_show(number=1), make_show(number=2)]
        assert format_episode_ranges(shows) == "S01E01-02"

    def test_all_without_airtime(self, make_show):
        assert all_without_airtime([make_show(airtime=None), make_show(airtime="")])
        assert not all_without_airtime([make_show(airtime=None), make_show(airtime="20:00")])


class TestPad:

    def test_pads_short_text(self):
        assert pad("abc", 5) == "abc  "

    def test_truncates_long_text(self):
        assert pad("abcdef", 4) == "abc…"
