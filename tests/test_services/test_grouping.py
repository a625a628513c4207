"""Unit tests for network grouping and time sorting."""
import pytest

from whatsontv.services.grouping import (
    group_shows_by_network,
    group_shows_by_show_id,
    normalize_network_name,
    parse_airtime,
    sort_episodes_by_number,
    sort_shows_by_time,
)


class TestNormalizeNetworkName:
    """Tests for normalize_network_name."""

    @pytest.mark.parametrize("name, expected", [
        ("CBS (US)", "CBS"),
        ("Hulu (jp)", "Hulu"),
        ("  Hulu  ", "Hulu"),
        ("BBC One", "BBC One"),
        ("Channel (Four)", "Channel (Four)"),
        ("", "Unknown Network"),
        (None, "Unknown Network"),
        (" (US)", "Unknown Network"),
    ])
    def test_normalize(self, name, expected):
        assert normalize_network_name(name) == expected


class TestGroupShowsByNetwork:
    """Tests for group_shows_by_network."""

    def test_country_variants_share_a_group(self, make_show):
        shows = [make_show(id=1, network="Hulu (JP)"), make_show(id=2, network="Hulu")]
        groups = group_shows_by_network(shows)

        assert list(groups) == ["Hulu"]
        assert len(groups["Hulu"]) == 2

    def test_shows_keep_original_network(self, make_show):
        groups = group_shows_by_network([make_show(network="Hulu (JP)")])
        assert groups["Hulu"][0].network == "Hulu (JP)"

    def test_no_show_lost_or_duplicated(self, make_show):
        shows = [
            make_show(id=i, network=network)
            for i, network in enumerate(["ABC", "CBS (US)", "ABC (AU)", "Unknown Network", "HBO", "CBS"])
        ]
        groups = group_shows_by_network(shows)

        assert sum(len(group) for group in groups.values()) == len(shows)
        assert sorted(show.id for group in groups.values() for show in group) == list(range(len(shows)))

    def test_order_of_first_appearance(self, make_show):
        shows = [make_show(id=1, network="NBC"), make_show(id=2, network="ABC"), make_show(id=3, network="NBC")]
        groups = group_shows_by_network(shows)

        assert list(groups) == ["NBC", "ABC"]
        assert [show.id for show in groups["NBC"]] == [1, 3]

    def test_unknown_network_group(self, make_show):
        groups = group_shows_by_network([make_show(network="Unknown Network")])
        assert list(groups) == ["Unknown Network"]

    def test_empty(self):
        assert group_shows_by_network([]) == {}


class TestGroupShowsByShowId:

    def test_groups_episodes(self, make_show):
        shows = [make_show(id=1, number=1), make_show(id=2), make_show(id=1, number=2)]
        groups = group_shows_by_show_id(shows)
        assert [show.number for show in groups[1]] == [1, 2]
        assert len(groups[2]) == 1


class TestSortShowsByTime:
    """Tests for sort_shows_by_time."""

    def test_timed_first_untimed_last(self, make_show):
        shows = [make_show(airtime="21:00"), make_show(airtime=None), make_show(airtime="20:00")]
        assert [show.airtime for show in sort_shows_by_time(shows)] == ["20:00", "21:00", None]

    def test_numeric_time_comparison(self, make_show):
        shows = [make_show(airtime="10:00"), make_show(airtime="9:05")]
        assert [show.airtime for show in sort_shows_by_time(shows)] == ["9:05", "10:00"]

    def test_zero_padded_before_later(self, make_show):
        shows = [make_show(airtime="10:00"), make_show(airtime="09:05")]
        assert sort_shows_by_time(shows)[0].airtime == "09:05"

    def test_empty_and_invalid_airtime_untimed(self, make_show):
        shows = [make_show(airtime=""), make_show(airtime="late"), make_show(airtime="06:00")]
        assert sort_shows_by_time(shows)[0].airtime == "06:00"

    def test_ties_broken_by_name(self, make_show):
        shows = [
            make_show(show_name="Zed", airtime="20:00"),
            make_show(show_name="Alpha", airtime="20:00"),
            make_show(show_name="Mid", airtime=None),
            make_show(show_name="Beta", airtime=None),
        ]
        assert [show.show_name for show in sort_shows_by_time(shows)] == ["Alpha", "Zed", "Beta", "Mid"]

    def test_idempotent(self, make_show):
        shows = [
            make_show(show_name=name, airtime=airtime)
            for name, airtime in [("B", "21:00"), ("A", None), ("C", "9:30"), ("D", "21:00"), ("E", "")]
        ]
        once = sort_shows_by_time(shows)
        assert sort_shows_by_time(once) == once

    def test_does_not_mutate_input(self, make_show):
        shows = [make_show(airtime="21:00"), make_show(airtime="20:00")]
        sort_shows_by_time(shows)
        assert shows[0].airtime == "21:00"


class TestHelpers:

    @pytest.mark.parametrize("airtime, expected", [
        ("20:00", (20, 0)),
        ("9:05", (9, 5)),
        ("", None),
        (None, None),
        ("20", None),
        ("ab:cd", None),
    ])
    def test_parse_airtime(self, airtime, expected):
        assert parse_airtime(airtime) == expected

    def test_sort_episodes_by_number(self, make_show):
        shows = [make_show(season=2, number=1), make_show(season=1, number=3), make_show(season=1, number=2)]
        assert [(s.season, s.number) for s in sort_episodes_by_number(shows)] == [(1, 2), (1, 3), (2, 1)]
