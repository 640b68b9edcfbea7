"""
Booking Domain Types

Core vocabulary of the booking domain:
- BookingType: which inventory collection a booking points to
- BookingStatus / PaymentStatus: the two halves of the lifecycle state
- BookedItemRef: typed reference to the booked inventory unit
- Requester: who is asking for an operation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError


class BookingType(str, Enum):
    """
    Inventory type of a booking

    Values are stored capitalized ("Flight"). Input in any letter case is
    accepted through ``parse``.
    """
    FLIGHT = 'Flight'
    HOTEL = 'Hotel'
    TOUR = 'Tour'
    CAR = 'Car'

    @classmethod
    def parse(cls, value) -> 'BookingType':
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Invalid booking type.", value=value)
        normalized = value.strip().capitalize()
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"Invalid booking type: {value}.", value=value) from None

    @property
    def uses_date_range(self) -> bool:
        """Hotel and Car bookings cover [start_date, end_date]."""
        return self in (BookingType.HOTEL, BookingType.CAR)

    @property
    def counts_passengers(self) -> bool:
        """Flight and Tour bookings require a passenger/participant count."""
        return self in (BookingType.FLIGHT, BookingType.TOUR)


class BookingStatus(str, Enum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


class PaymentStatus(str, Enum):
    PENDING = 'pending'
    PAID = 'paid'
    REFUNDED = 'refunded'


@dataclass(frozen=True)
class BookedItemRef(ValueObject):
    """
    Reference to the booked inventory unit

    For hotels the unit is a specific room number of a room; for the other
    types it is the item itself.
    """
    booking_type: BookingType
    item_id: int
    room_id: int | None = None
    room_number: int | None = None

    def __post_init__(self):
        if self.booking_type is BookingType.HOTEL and (self.room_id is None or self.room_number is None):
            raise ValidationError("Hotel bookings require a room and a room number.")

    def __str__(self):
        if self.booking_type is BookingType.HOTEL:
            return f"Hotel {self.item_id} room {self.room_id} #{self.room_number}"
        return f"{self.booking_type.value} {self.item_id}"


@dataclass(frozen=True)
class Requester(ValueObject):
    user_id: int
    is_admin: bool = False

    def can_access(self, owner_id: int) -> bool:
        return self.is_admin or self.user_id == owner_id
