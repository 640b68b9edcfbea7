"""FilterSet for the admin booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from shared.domain.exceptions import ValidationError as DomainValidationError

from .domain.entities import BookingType
from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Booking.PaymentStatus.choices)
    # Any letter case: "hotel", "HOTEL" and "Hotel" are the same type
    booking_type = django_filters.CharFilter(method="filter_booking_type")
    user = django_filters.NumberFilter(field_name="user_id", lookup_expr="exact")

    class Meta:
        model = Booking
        fields = ["status", "payment_status", "booking_type", "user"]

    def filter_booking_type(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        try:
            booking_type = BookingType.parse(value)
        except DomainValidationError:
            return queryset.none()
        return queryset.filter(booking_type=booking_type.value)
