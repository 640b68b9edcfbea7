"""
Availability Calculator

Pure functions over calendar days. Inventory stores unavailable/offered
dates as ISO ``YYYY-MM-DD`` strings; every comparison here is made by
calendar day, so the time of day of any input never matters.
"""

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from typing import Iterable, Iterator

from django.utils import timezone  # type: ignore
from django.utils.dateparse import parse_date, parse_datetime  # type: ignore

from shared.domain.value_objects import DateRange


def to_calendar_day(value) -> date:
    """
    Normalize a date, datetime or ISO string to its calendar day

    Aware datetimes are converted to UTC first, so
    ``2025-08-01T23:30:00-05:00`` falls on 2025-08-02.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = value.astimezone(dt_timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            moment = parse_datetime(text)
        except ValueError:
            moment = None
        if moment is not None:
            return to_calendar_day(moment)
        try:
            parsed = parse_date(text[:10]) if len(text) >= 10 else None
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    raise ValueError(f"Not a calendar date: {value!r}")


def dates_in_range(start, end) -> Iterator[date]:
    """
    Yield every calendar day from start to end, both inclusive, ascending

    Calling it again restarts the sequence. An end before the start yields
    nothing.
    """
    first, last = to_calendar_day(start), to_calendar_day(end)
    if first > last:
        return iter(())
    return DateRange(first, last).days()


def _day_keys(values: Iterable) -> set[str]:
    return {to_calendar_day(value).isoformat() for value in values}


def is_range_available(unavailable_dates: Iterable, start, end) -> bool:
    """True iff no day of [start, end] appears in ``unavailable_dates``."""
    taken = _day_keys(unavailable_dates)
    return all(day.isoformat() not in taken for day in dates_in_range(start, end))


def is_date_offered(available_dates: Iterable, day) -> bool:
    """True iff ``day`` is one of ``available_dates`` (by calendar day)."""
    return to_calendar_day(day).isoformat() in _day_keys(available_dates)


def block_dates(unavailable_dates: Iterable, start, end) -> list[str]:
    """
    Return the collection with every day of [start, end] added

    Days already present are not added again, so retrying a block leaves
    the collection unchanged.
    """
    result = [to_calendar_day(value).isoformat() for value in unavailable_dates]
    present = set(result)
    for day in dates_in_range(start, end):
        key = day.isoformat()
        if key not in present:
            result.append(key)
            present.add(key)
    return result


def unblock_dates(unavailable_dates: Iterable, start, end) -> list[str]:
    """Return the collection with every occurrence of every day of [start, end] removed."""
    released = {day.isoformat() for day in dates_in_range(start, end)}
    return [
        to_calendar_day(value).isoformat()
        for value in unavailable_dates
        if to_calendar_day(value).isoformat() not in released
    ]
