"""Tests for the inclusive date range."""

from __future__ import annotations

from datetime import date

import pytest

from shared.domain.value_objects import DateRange


def test_range_is_inclusive():
    stay = DateRange(date(2025, 7, 20), date(2025, 7, 22))

    assert list(stay.days()) == [date(2025, 7, 20), date(2025, 7, 21), date(2025, 7, 22)]
    assert str(stay) == "2025-07-20 - 2025-07-22"


def test_single_day_range():
    assert list(DateRange(date(2025, 7, 20), date(2025, 7, 20)).days()) == [date(2025, 7, 20)]


def test_inverted_range_is_rejected():
    with pytest.raises(ValueError):
        DateRange(date(2025, 7, 22), date(2025, 7, 20))
