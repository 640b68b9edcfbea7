"""Booking persistence model."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import entities
from .domain.entities import BookedItemRef, BookingType
from .domain.state_machine import BookingState


class Booking(models.Model):
    """Reservation of a flight seat, hotel room number, tour date or car."""

    class Type(models.TextChoices):
        FLIGHT = BookingType.FLIGHT.value, _("Flight")
        HOTEL = BookingType.HOTEL.value, _("Hotel")
        TOUR = BookingType.TOUR.value, _("Tour")
        CAR = BookingType.CAR.value, _("Car")

    class Status(models.TextChoices):
        PENDING = entities.BookingStatus.PENDING.value, _("Pending")
        CONFIRMED = entities.BookingStatus.CONFIRMED.value, _("Confirmed")
        CANCELLED = entities.BookingStatus.CANCELLED.value, _("Cancelled")
        COMPLETED = entities.BookingStatus.COMPLETED.value, _("Completed")

    class PaymentStatus(models.TextChoices):
        PENDING = entities.PaymentStatus.PENDING.value, _("Pending")
        PAID = entities.PaymentStatus.PAID.value, _("Paid")
        REFUNDED = entities.PaymentStatus.REFUNDED.value, _("Refunded")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    booking_type = models.CharField(max_length=10, choices=Type.choices)
    booked_item_id = models.PositiveBigIntegerField(
        help_text=_("Primary key of the flight, hotel, tour or car, depending on the booking type."),
    )
    room = models.ForeignKey(
        "inventory.Room",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    room_number = models.PositiveIntegerField(null=True, blank=True)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    passengers = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_id = models.CharField(max_length=64, blank=True)
    inventory_applied = models.BooleanField(
        default=False,
        help_text=_("Seats taken or dates blocked on the inventory unit for this booking."),
    )
    hold_expires_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Until this moment a pending hotel or car booking keeps its dates."),
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(end_date__isnull=True) | models.Q(end_date__gte=models.F("start_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                check=models.Q(total_price__gte=0),
                name="booking_non_negative_price",
            ),
        ]
        indexes = [
            models.Index(fields=["booking_type", "booked_item_id", "status"], name="booking_item_status_idx"),
            models.Index(fields=["booking_code"], name="booking_code_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code} ({self.booking_type} {self.booked_item_id})"

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    @property
    def state(self) -> BookingState:
        return BookingState.of(self.status, self.payment_status)

    @state.setter
    def state(self, value: BookingState) -> None:
        self.status = value.status.value
        self.payment_status = value.payment_status.value

    @property
    def item_ref(self) -> BookedItemRef:
        return BookedItemRef(
            booking_type=BookingType.parse(self.booking_type),
            item_id=self.booked_item_id,
            room_id=self.room_id,
            room_number=self.room_number,
        )

