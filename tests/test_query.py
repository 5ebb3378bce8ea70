"""Tests for the fluent query helpers in veezi.query."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from veezi.query import FilmList, RecordList, SessionList


NOW = datetime(2026, 10, 19, 12, 0)
TODAY = date(2026, 10, 19)


@pytest.fixture
def sessions(make_session) -> SessionList:
    """Five sessions over three days with a mix of statuses and seat counts."""
    return SessionList(
        [
            make_session(Id=1, PreShowStartTime="2026-10-19T10:00:00", SeatsSold=10, SeatsAvailable=50),
            make_session(Id=2, PreShowStartTime="2026-10-19T20:00:00", SeatsSold=40, SeatsAvailable=0),
            make_session(
                Id=3,
                PreShowStartTime="2026-10-20T18:00:00",
                SalesCutOffTime="2026-10-20T18:15:00",
                FilmId="HO00000102",
                ScreenId=2,
                Attributes=[],
            ),
            make_session(Id=4, PreShowStartTime="2026-10-19T15:00:00", Status="Closed", SeatsSold=20),
            make_session(
                Id=5,
                PreShowStartTime="2026-10-21T09:00:00",
                SalesCutOffTime="2026-10-21T09:15:00",
                ShowType="Private",
            ),
        ]
    )


def _ids(records) -> list:
    return [record.id for record in records]


# ---------------------------------------------------------------------------
# Sequence behaviour
# ---------------------------------------------------------------------------


class TestRecordList:
    def test_sequence_protocol(self, sessions: SessionList) -> None:
        assert len(sessions) == 5
        assert sessions[0].id == 1
        assert isinstance(sessions[1:3], SessionList)
        assert _ids(sessions[1:3]) == [2, 3]
        assert list(reversed(sessions))[0].id == 5

    def test_equality(self, sessions: SessionList) -> None:
        assert sessions == SessionList(list(sessions))
        assert sessions != RecordList(list(sessions))
        assert sessions != list(sessions)

    def test_empty(self) -> None:
        empty = RecordList()
        assert len(empty) == 0
        assert not empty
        assert empty.first() is None
        assert empty.sum("x") == 0
        assert empty.average("x") is None
        assert empty.group_by(lambda r: r) == {}

    def test_generic_filter_and_exclude(self) -> None:
        numbers = RecordList([1, 2, 3, 4])
        assert numbers.filter(lambda n: n % 2 == 0).to_list() == [2, 4]
        assert numbers.exclude(lambda n: n % 2 == 0).to_list() == [1, 3]
        assert numbers.count(lambda n: n > 1) == 3
        assert numbers.count() == 4

    def test_aggregates_accept_callables(self) -> None:
        numbers = RecordList([1, 2, 3, 4])
        assert numbers.sum(lambda n: n * 10) == 100
        assert numbers.average(lambda n: n) == 2.5

    def test_input_is_not_modified(self, sessions: SessionList) -> None:
        before = sessions.to_list()
        sessions.filter_today(TODAY).sort_by_start_time(reverse=True)
        assert sessions.to_list() == before

    def test_to_list_is_a_copy(self, sessions: SessionList) -> None:
        items = sessions.to_list()
        items.clear()
        assert len(sessions) == 5


# ---------------------------------------------------------------------------
# Session filters
# ---------------------------------------------------------------------------


class TestSessionFilters:
    def test_filter_today(self, sessions: SessionList) -> None:
        assert _ids(sessions.filter_today(TODAY)) == [1, 2, 4]

    def test_filter_today_defaults_to_local_date(self, make_session) -> None:
        today = date.today().isoformat()
        sessions = SessionList(
            [
                make_session(Id=1, PreShowStartTime=f"{today}T12:00:00"),
                make_session(Id=2, PreShowStartTime="2000-01-01T12:00:00"),
            ]
        )
        assert _ids(sessions.filter_today()) == [1]

    def test_filter_by_date_range(self, sessions: SessionList) -> None:
        result = sessions.filter_by_date_range(date(2026, 10, 20), date(2026, 10, 21))
        assert _ids(result) == [3, 5]

    def test_filter_open_for_sales(self, sessions: SessionList) -> None:
        assert _ids(sessions.filter_open_for_sales(NOW)) == [1, 3, 5]

    def test_filter_has_available_seats(self, sessions: SessionList) -> None:
        assert 2 not in _ids(sessions.filter_has_available_seats())

    def test_filter_by_film_screen_attribute(self, sessions: SessionList) -> None:
        assert _ids(sessions.filter_by_film("HO00000102")) == [3]
        assert _ids(sessions.filter_by_screen(2)) == [3]
        assert _ids(sessions.filter_containing_attribute("0000000001")) == [1, 2, 4, 5]

    def test_filter_public_and_web(self, sessions: SessionList) -> None:
        assert _ids(sessions.filter_public()) == [1, 2, 3, 4]
        assert _ids(sessions.filter_web()) == [1, 2, 3, 4]

    def test_filters_commute(self, sessions: SessionList) -> None:
        one = sessions.filter_today(TODAY).filter_open_for_sales(NOW)
        other = sessions.filter_open_for_sales(NOW).filter_today(TODAY)
        assert set(_ids(one)) == set(_ids(other)) == {1}


# ---------------------------------------------------------------------------
# Sorting and grouping
# ---------------------------------------------------------------------------


class TestSortingAndGrouping:
    def test_sort_by_start_time(self, sessions: SessionList) -> None:
        assert _ids(sessions.sort_by_start_time()) == [1, 4, 2, 3, 5]
        assert _ids(sessions.sort_by_start_time(reverse=True)) == [5, 3, 2, 4, 1]

    def test_sort_is_stable(self, sessions: SessionList) -> None:
        assert _ids(sessions.sort_by("screen_id")) == [1, 2, 4, 5, 3]

    def test_group_by_date_empty(self) -> None:
        assert SessionList().group_by_date() == {}

    def test_group_by_date(self, sessions: SessionList) -> None:
        groups = sessions.group_by_date()
        assert list(groups) == [date(2026, 10, 19), date(2026, 10, 20), date(2026, 10, 21)]
        assert sum(len(group) for group in groups.values()) == len(sessions)
        assert _ids(groups[date(2026, 10, 19)]) == [1, 2, 4]
        assert all(isinstance(group, SessionList) for group in groups.values())

    def test_group_by_film_keeps_first_appearance_order(self, sessions: SessionList) -> None:
        groups = sessions.group_by_film()
        assert list(groups) == ["HO00000101", "HO00000102"]
        assert _ids(groups["HO00000101"]) == [1, 2, 4, 5]


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class TestAggregates:
    def test_totals(self, sessions: SessionList) -> None:
        assert sessions.total_seats_sold() == 10 + 40 + 30 + 20 + 30
        assert sessions.total_seats_available() == 50 + 0 + 120 + 120 + 120

    def test_average(self, sessions: SessionList) -> None:
        assert sessions.average_seats_sold() == pytest.approx(26.0)
        assert SessionList().average_seats_sold() is None


# ---------------------------------------------------------------------------
# Film queries
# ---------------------------------------------------------------------------


class TestFilmList:
    @pytest.fixture
    def films(self, make_film) -> FilmList:
        return FilmList(
            [
                make_film(Id="A", Title="zodiac", Genre="Thriller", DisplaySequence=3, Duration=157),
                make_film(Id="B", Title="Avatar", Genre="Adventure", Format="3D HFR", DisplaySequence=1, Duration=180),
                make_film(Id="C", Title="Memento", Genre="thriller", Status="Inactive", DisplaySequence=2, Duration=113),
            ]
        )

    def test_filters(self, films: FilmList) -> None:
        assert _ids(films.filter_active()) == ["A", "B"]
        assert _ids(films.filter_3d()) == ["B"]
        assert _ids(films.filter_2d()) == ["A", "C"]
        assert _ids(films.filter_by_genre("THRILLER")) == ["A", "C"]

    def test_sorts(self, films: FilmList) -> None:
        assert _ids(films.sort_by_title()) == ["B", "C", "A"]
        assert _ids(films.sort_by_display_sequence()) == ["B", "C", "A"]

    def test_group_by_genre(self, films: FilmList) -> None:
        assert list(films.group_by_genre()) == ["Thriller", "Adventure", "thriller"]

    def test_average_duration(self, films: FilmList) -> None:
        assert films.average_duration() == pytest.approx(150.0)
        assert FilmList().average_duration() is None
