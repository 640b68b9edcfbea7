"""
Common Value Objects

- DateRange: an inclusive range of calendar days (stay, rental or travel date)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from shared.domain.base import ValueObject

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents the calendar days from start_date to end_date, both inclusive.
    A single-day range has start_date == end_date.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must not be after end date ({self.end_date})")

    def days(self) -> Iterator[date]:
        """Iterate over every calendar day in the range, ascending."""
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += ONE_DAY

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
