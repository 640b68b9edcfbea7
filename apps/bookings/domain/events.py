"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created (status pending)

    Flight bookings already hold their seats at this point.
    """
    booking_id: int
    user_id: int
    booking_type: str
    booked_item_id: int
    start_date: date
    end_date: date | None


@dataclass
class BookingConfirmed(DomainEvent):
    """
    Event: Booking payment confirmed (pending -> confirmed/paid)

    Hotel and Car dates are blocked in the same transaction.
    """
    booking_id: int
    user_id: int
    payment_id: str


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled

    Inventory has been restored if it had been applied.
    """
    booking_id: int
    user_id: int
    old_status: str
    payment_status: str
    inventory_released: bool


@dataclass
class BookingStatusOverridden(DomainEvent):
    """Event: An admin replaced the status fields directly"""
    booking_id: int
    old_state: str
    new_state: str
