"""Tests for the stored date collections of inventory rows."""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.bookings.tests.factories import make_car, make_hotel_with_rooms, make_tour
from apps.inventory.validators import validate_calendar_days


class CalendarDaysValidatorTests(TestCase):
    def test_accepts_dates_and_datetimes(self) -> None:
        validate_calendar_days([])
        validate_calendar_days(["2025-09-01", "2025-09-02T00:00:00.000Z"])

    def test_rejects_malformed_entries(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_calendar_days(["2025-09-01", "2025/09/01", 20250901])

        self.assertIn("2025/09/01", ctx.exception.messages[0])
        self.assertIn("20250901", ctx.exception.messages[0])

    def test_rejects_non_list(self) -> None:
        with self.assertRaises(ValidationError):
            validate_calendar_days({"from": "2025-09-01"})

    def test_full_clean_checks_every_date_collection(self) -> None:
        car = make_car()
        car.unavailable_dates = ["2025/09/01"]
        tour = make_tour()
        tour.available_dates = ["next tuesday"]
        _, _, numbers = make_hotel_with_rooms((101,))
        number = numbers[101]
        number.unavailable_dates = ["2025-02-30"]

        for row, field in ((car, "unavailable_dates"), (tour, "available_dates"), (number, "unavailable_dates")):
            with self.subTest(model=type(row).__name__):
                with self.assertRaises(ValidationError) as ctx:
                    row.full_clean()
                self.assertIn(field, ctx.exception.message_dict)
