"""
Collaborator interfaces consumed by the booking engine.

The Django ORM implementations live in ``apps.inventory.repositories``,
``apps.users.repositories`` and ``apps.bookings.repositories``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from apps.bookings.domain.entities import BookedItemRef, BookingType


class InventoryRepository(ABC):
    """Read access to the four inventory types plus their atomic mutations."""

    @abstractmethod
    def get_by_id(self, booking_type: BookingType, item_id: int, *, lock: bool = False):
        """Return the inventory item of the given type, or None."""

    @abstractmethod
    def get_many(self, booking_type: BookingType, item_ids) -> dict:
        """Return the existing items of one type keyed by id."""

    @abstractmethod
    def get_flight(self, flight_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def get_hotel(self, hotel_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def get_room(self, room_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def get_room_number(self, room_id: int, number: int, *, lock: bool = False):
        ...

    @abstractmethod
    def get_car(self, car_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def get_tour(self, tour_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def take_seats(self, flight_id: int, seats: int) -> bool:
        """Decrement available seats iff at least ``seats`` are left, as one atomic update."""

    @abstractmethod
    def return_seats(self, flight_id: int, seats: int) -> None:
        ...

    @abstractmethod
    def save(self, item) -> None:
        ...


class BookingRepository(ABC):

    @abstractmethod
    def get_by_id(self, booking_id: int, *, lock: bool = False):
        ...

    @abstractmethod
    def add(self, booking) -> None:
        ...

    @abstractmethod
    def save(self, booking) -> None:
        ...

    @abstractmethod
    def list_for_user(self, user_id: int):
        ...

    @abstractmethod
    def list_all(self):
        ...

    @abstractmethod
    def has_live_hold(
        self,
        ref: BookedItemRef,
        start_date: date,
        end_date: date,
        *,
        exclude_booking_id: int | None = None,
    ) -> bool:
        """True if another pending booking with an unexpired hold overlaps the range on the same unit."""


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int):
        ...
