"""Django ORM implementation of the booking port."""

from __future__ import annotations

from django.utils import timezone  # type: ignore

from shared.infrastructure.db import lock_queryset_if_possible

from .application.ports import BookingRepository
from .domain.entities import BookingType
from .models import Booking


class DjangoBookingRepository(BookingRepository):

    def _queryset(self):
        return Booking.objects.select_related("user", "room").prefetch_related("room__room_numbers")

    def get_by_id(self, booking_id, *, lock=False):
        queryset = Booking.objects.all() if lock else self._queryset()
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        return queryset.filter(pk=booking_id).first()

    def add(self, booking):
        booking.save()

    def save(self, booking):
        booking.save()

    def list_for_user(self, user_id):
        return self._queryset().filter(user_id=user_id)

    def list_all(self):
        return self._queryset()

    def has_live_hold(self, ref, start_date, end_date, *, exclude_booking_id=None):
        holds = Booking.objects.filter(
            booking_type=ref.booking_type.value,
            status=Booking.Status.PENDING,
            hold_expires_at__gt=timezone.now(),
            start_date__lte=end_date,
            end_date__gte=start_date,
        )
        if ref.booking_type is BookingType.HOTEL:
            holds = holds.filter(room_id=ref.room_id, room_number=ref.room_number)
        else:
            holds = holds.filter(booked_item_id=ref.item_id)
        if exclude_booking_id is not None:
            holds = holds.exclude(pk=exclude_booking_id)
        return holds.exists()
