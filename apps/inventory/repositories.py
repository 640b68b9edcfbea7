"""Django ORM implementation of the inventory port."""

from __future__ import annotations

import logging

from django.db.models import F  # type: ignore

from apps.bookings.application.ports import InventoryRepository
from apps.bookings.domain.entities import BookingType
from shared.infrastructure.db import lock_queryset_if_possible

from .models import Car, Flight, Hotel, Room, RoomNumber, Tour

logger = logging.getLogger(__name__)

MODEL_BY_TYPE = {
    BookingType.FLIGHT: Flight,
    BookingType.HOTEL: Hotel,
    BookingType.TOUR: Tour,
    BookingType.CAR: Car,
}


class DjangoInventoryRepository(InventoryRepository):

    def _get(self, queryset, lock=False, **lookup):
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        return queryset.filter(**lookup).first()

    def get_by_id(self, booking_type, item_id, *, lock=False):
        model = MODEL_BY_TYPE[BookingType.parse(booking_type)]
        return self._get(model.objects.all(), lock, pk=item_id)

    def get_many(self, booking_type, item_ids):
        model = MODEL_BY_TYPE[BookingType.parse(booking_type)]
        return model.objects.in_bulk(set(item_ids))

    def get_flight(self, flight_id, *, lock=False):
        return self._get(Flight.objects.all(), lock, pk=flight_id)

    def get_hotel(self, hotel_id, *, lock=False):
        return self._get(Hotel.objects.all(), lock, pk=hotel_id)

    def get_room(self, room_id, *, lock=False):
        return self._get(Room.objects.all(), lock, pk=room_id)

    def get_room_number(self, room_id, number, *, lock=False):
        return self._get(RoomNumber.objects.all(), lock, room_id=room_id, number=number)

    def get_car(self, car_id, *, lock=False):
        return self._get(Car.objects.all(), lock, pk=car_id)

    def get_tour(self, tour_id, *, lock=False):
        return self._get(Tour.objects.all(), lock, pk=tour_id)

    def take_seats(self, flight_id, seats):
        # Single conditional UPDATE: the seat check and the decrement cannot interleave.
        updated = Flight.objects.filter(pk=flight_id, available_seats__gte=seats).update(
            available_seats=F("available_seats") - seats
        )
        if not updated:
            logger.warning(f"Could not take {seats} seat(s) on flight {flight_id}")
        return bool(updated)

    def return_seats(self, flight_id, seats):
        updated = Flight.objects.filter(pk=flight_id).update(available_seats=F("available_seats") + seats)
        if not updated:
            logger.warning(f"Flight {flight_id} no longer exists, {seats} seat(s) not returned")

    def save(self, item):
        if isinstance(item, RoomNumber):
            item.save(update_fields=["unavailable_dates"])
        elif isinstance(item, Car):
            item.save(update_fields=["unavailable_dates", "updated_at"])
        else:
            item.save()
