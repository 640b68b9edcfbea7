"""Tests for the calendar-day availability functions."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from apps.bookings.domain.availability import (
    block_dates,
    dates_in_range,
    is_date_offered,
    is_range_available,
    to_calendar_day,
    unblock_dates,
)


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2025, 7, 20), date(2025, 7, 20)),
        (date(2025, 7, 20), date(2025, 7, 22)),
        (date(2024, 2, 27), date(2024, 3, 2)),
        (date(2025, 12, 30), date(2026, 1, 2)),
    ],
)
def test_dates_in_range_is_inclusive_and_one_day_apart(start, end):
    days = list(dates_in_range(start, end))

    assert len(days) == (end - start).days + 1
    assert days[0] == start
    assert days[-1] == end
    assert all(later - earlier == timedelta(days=1) for earlier, later in zip(days, days[1:]))


def test_dates_in_range_is_restartable():
    start, end = date(2025, 8, 1), date(2025, 8, 3)

    assert list(dates_in_range(start, end)) == list(dates_in_range(start, end))


def test_dates_in_range_ignores_time_of_day():
    start = datetime(2025, 8, 1, 23, 59, tzinfo=timezone.utc)
    end = "2025-08-03T00:00:00.000Z"

    assert list(dates_in_range(start, end)) == [date(2025, 8, 1), date(2025, 8, 2), date(2025, 8, 3)]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-08-01T23:30:00-05:00", date(2025, 8, 2)),
        ("2025-08-02T01:30:00+03:00", date(2025, 8, 1)),
        (datetime(2025, 8, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5))), date(2025, 8, 2)),
        ("2025-08-01T23:30:00", date(2025, 8, 1)),
        ("2025-08-01", date(2025, 8, 1)),
    ],
)
def test_to_calendar_day_takes_the_utc_day_of_offset_times(value, expected):
    assert to_calendar_day(value) == expected


def test_offset_start_date_checks_the_utc_day():
    assert not is_range_available(["2025-08-02"], "2025-08-01T23:30:00-05:00", "2025-08-02")
    assert is_range_available(["2025-08-01"], "2025-08-01T23:30:00-05:00", "2025-08-02")


def test_dates_in_range_inverted_is_empty():
    assert list(dates_in_range(date(2025, 8, 3), date(2025, 8, 1))) == []


def test_to_calendar_day_rejects_garbage():
    with pytest.raises(ValueError):
        to_calendar_day("not a date")
    with pytest.raises(ValueError):
        to_calendar_day(None)
    with pytest.raises(ValueError):
        to_calendar_day("2025/09/01")
    with pytest.raises(ValueError):
        to_calendar_day("2025-13-01")


def test_range_available_when_no_day_is_taken():
    unavailable = ["2025-07-18", "2025-07-23"]

    assert is_range_available(unavailable, date(2025, 7, 20), date(2025, 7, 22))


@pytest.mark.parametrize("taken", ["2025-07-20", "2025-07-21", "2025-07-22", "2025-07-22T10:00:00Z"])
def test_range_unavailable_when_any_day_is_taken(taken):
    assert not is_range_available([taken], date(2025, 7, 20), date(2025, 7, 22))


def test_is_date_offered_matches_by_calendar_day():
    offered = ["2025-09-10T00:00:00.000Z", "2025-09-17"]

    assert is_date_offered(offered, date(2025, 9, 10))
    assert is_date_offered(offered, "2025-09-17T15:30:00Z")
    assert not is_date_offered(offered, date(2025, 9, 11))
    assert not is_date_offered([], date(2025, 9, 10))


def test_block_dates_adds_every_day_once():
    blocked = block_dates(["2025-08-02"], date(2025, 8, 1), date(2025, 8, 3))

    assert sorted(blocked) == ["2025-08-01", "2025-08-02", "2025-08-03"]
    assert block_dates(blocked, date(2025, 8, 1), date(2025, 8, 3)) == blocked


def test_unblock_dates_removes_duplicates_too():
    unavailable = ["2025-08-01", "2025-08-01", "2025-08-02", "2025-08-10"]

    assert unblock_dates(unavailable, date(2025, 8, 1), date(2025, 8, 3)) == ["2025-08-10"]


@pytest.mark.parametrize(
    "before",
    [
        [],
        ["2025-07-01", "2025-07-31"],
        ["2025-08-15"],
    ],
)
def test_block_then_unblock_restores_the_set(before):
    start, end = date(2025, 8, 1), date(2025, 8, 3)

    after = unblock_dates(block_dates(before, start, end), start, end)

    assert set(after) == set(before)
