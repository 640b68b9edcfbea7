"""
Inventory Policies

Each inventory type decides when its mutation is applied:

- Flight reserves at creation: seats are taken by one atomic conditional
  update before payment, so a flight can never be overbooked.
- Hotel and Car commit at confirmation: creation only validates; the date
  range is blocked when payment is confirmed. Between the two, a pending
  booking holds its range (``hold_expires_at``), and both steps check the
  unit's dates and the other live holds under a row lock.
- Tour never mutates inventory: it only checks that the start date is
  offered.

Every policy also knows how to release what it applied. The lifecycle
handlers call these methods inside a single unit of work.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date

from shared.domain.exceptions import ConflictError, InventoryDataError, NotFoundError

from .availability import block_dates, is_date_offered, is_range_available, unblock_dates
from .entities import BookedItemRef, BookingType

logger = logging.getLogger(__name__)


@contextmanager
def reading_stored_dates(ref: BookedItemRef):
    """Turn a malformed stored date into an InventoryDataError."""
    try:
        yield
    except ValueError as exc:
        logger.error(f"Malformed stored dates on {ref}: {exc}")
        raise InventoryDataError(unit=str(ref)) from exc


class InventoryPolicy(ABC):
    """Strategy for one inventory type."""

    booking_type: BookingType

    def __init__(self, inventory_repo, booking_repo):
        self.inventory_repo = inventory_repo
        self.booking_repo = booking_repo

    @abstractmethod
    def check_availability(self, ref: BookedItemRef, start_date: date, end_date: date | None, passengers: int) -> None:
        """Raise NotFoundError/ConflictError unless the unit can be booked. Never mutates."""

    def reserve_at_creation(self, booking) -> bool:
        """Apply the mutation while creating the booking. Returns True if applied."""
        return False

    def commit_at_confirmation(self, booking) -> bool:
        """Apply the deferred mutation on payment. Returns True if applied."""
        return False

    def release_at_cancellation(self, booking) -> None:
        """Undo the applied mutation."""


class FlightPolicy(InventoryPolicy):
    booking_type = BookingType.FLIGHT

    def check_availability(self, ref, start_date, end_date, passengers):
        flight = self.inventory_repo.get_flight(ref.item_id)
        if flight is None:
            raise NotFoundError("Flight not found.", flight_id=ref.item_id)
        if flight.available_seats < passengers:
            raise ConflictError(
                "The flight does not have enough available seats.",
                flight_id=ref.item_id,
                requested=passengers,
                available=flight.available_seats,
            )

    def reserve_at_creation(self, booking):
        # The seat check is repeated inside the UPDATE; losing a race here is a conflict.
        if not self.inventory_repo.take_seats(booking.booked_item_id, booking.passengers):
            raise ConflictError(
                "The flight does not have enough available seats.",
                flight_id=booking.booked_item_id,
                requested=booking.passengers,
            )
        logger.info(f"Took {booking.passengers} seat(s) on flight {booking.booked_item_id}")
        return True

    def release_at_cancellation(self, booking):
        self.inventory_repo.return_seats(booking.booked_item_id, booking.passengers)
        logger.info(f"Returned {booking.passengers} seat(s) to flight {booking.booked_item_id}")


class DateRangePolicy(InventoryPolicy):
    """Shared logic for units with a set of unavailable dates (hotel room numbers, cars)."""

    not_available_message = "The selected dates are not available."

    @abstractmethod
    def _load_unit(self, ref: BookedItemRef, *, lock: bool):
        """Return the row that carries ``unavailable_dates``, or raise NotFoundError."""

    def _ensure_free(self, ref, unit, start_date, end_date, *, exclude_booking_id=None) -> None:
        with reading_stored_dates(ref):
            available = is_range_available(unit.unavailable_dates, start_date, end_date)
        if not available:
            raise ConflictError(self.not_available_message, unit=str(ref))
        if self.booking_repo.has_live_hold(ref, start_date, end_date, exclude_booking_id=exclude_booking_id):
            raise ConflictError(self.not_available_message, unit=str(ref), reason="held by a pending booking")

    def check_availability(self, ref, start_date, end_date, passengers):
        unit = self._load_unit(ref, lock=True)
        self._ensure_free(ref, unit, start_date, end_date)

    def commit_at_confirmation(self, booking):
        ref = booking.item_ref
        unit = self._load_unit(ref, lock=True)
        self._ensure_free(ref, unit, booking.start_date, booking.end_date, exclude_booking_id=booking.pk)
        with reading_stored_dates(ref):
            unit.unavailable_dates = block_dates(unit.unavailable_dates, booking.start_date, booking.end_date)
        self.inventory_repo.save(unit)
        logger.info(f"Blocked {booking.start_date} - {booking.end_date} on {ref}")
        return True

    def release_at_cancellation(self, booking):
        ref = booking.item_ref
        try:
            unit = self._load_unit(ref, lock=True)
        except NotFoundError:
            # Deleted through the admin; nothing left to release.
            logger.warning(f"Cannot release dates of booking {booking.pk}: {ref} no longer exists")
            return
        with reading_stored_dates(ref):
            unit.unavailable_dates = unblock_dates(unit.unavailable_dates, booking.start_date, booking.end_date)
        self.inventory_repo.save(unit)
        logger.info(f"Released {booking.start_date} - {booking.end_date} on {ref}")


class HotelPolicy(DateRangePolicy):
    booking_type = BookingType.HOTEL
    not_available_message = "This room number is not available on the selected dates."

    def check_availability(self, ref, start_date, end_date, passengers):
        if self.inventory_repo.get_hotel(ref.item_id) is None:
            raise NotFoundError("Hotel not found.", hotel_id=ref.item_id)
        super().check_availability(ref, start_date, end_date, passengers)

    def _load_unit(self, ref, *, lock):
        room = self.inventory_repo.get_room(ref.room_id)
        if room is None or room.hotel_id != ref.item_id:
            raise NotFoundError("Room not found.", room_id=ref.room_id, hotel_id=ref.item_id)
        entry = self.inventory_repo.get_room_number(ref.room_id, ref.room_number, lock=lock)
        if entry is None:
            raise NotFoundError("Room number not found.", room_id=ref.room_id, number=ref.room_number)
        return entry


class CarPolicy(DateRangePolicy):
    booking_type = BookingType.CAR
    not_available_message = "This car is not available on the selected dates."

    def _load_unit(self, ref, *, lock):
        car = self.inventory_repo.get_car(ref.item_id, lock=lock)
        if car is None:
            raise NotFoundError("Car not found.", car_id=ref.item_id)
        return car


class TourPolicy(InventoryPolicy):
    booking_type = BookingType.TOUR

    def check_availability(self, ref, start_date, end_date, passengers):
        tour = self.inventory_repo.get_tour(ref.item_id)
        if tour is None:
            raise NotFoundError("Tour not found.", tour_id=ref.item_id)
        with reading_stored_dates(ref):
            offered = bool(tour.available_dates) and is_date_offered(tour.available_dates, start_date)
        if not offered:
            raise ConflictError("The tour is not offered on the selected date.", tour_id=ref.item_id)


POLICIES = {
    policy.booking_type: policy
    for policy in (FlightPolicy, HotelPolicy, CarPolicy, TourPolicy)
}


def policy_for(booking_type: BookingType, inventory_repo, booking_repo) -> InventoryPolicy:
    return POLICIES[booking_type](inventory_repo, booking_repo)
