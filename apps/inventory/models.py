"""Inventory models: flights, hotels with rooms, cars and tours.

Date collections (``unavailable_dates`` and ``available_dates``) are JSON
lists of ISO ``YYYY-MM-DD`` strings. They are read and mutated only through
``apps.bookings.domain.availability``.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .validators import validate_calendar_days


class Flight(models.Model):
    """Scheduled flight with a seat counter."""

    class Status(models.TextChoices):
        SCHEDULED = "scheduled", _("Scheduled")
        DELAYED = "delayed", _("Delayed")
        CANCELLED = "cancelled", _("Cancelled")
        DEPARTED = "departed", _("Departed")
        ARRIVED = "arrived", _("Arrived")

    airline = models.CharField(max_length=100)
    flight_number = models.CharField(max_length=20, unique=True)
    origin = models.CharField(max_length=100)
    destination = models.CharField(max_length=100)
    departure_time = models.DateTimeField()
    arrival_time = models.DateTimeField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    available_seats = models.PositiveIntegerField()
    total_seats = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    duration = models.CharField(max_length=20, blank=True)
    stops = models.PositiveSmallIntegerField(default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SCHEDULED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Flight")
        verbose_name_plural = _("Flights")
        ordering = ["departure_time"]

    def __str__(self) -> str:
        return f"{self.flight_number} {self.origin} → {self.destination}"

    def calculate_duration(self) -> str:
        minutes = int((self.arrival_time - self.departure_time).total_seconds() // 60)
        return f"{minutes // 60}h {minutes % 60}m"

    def save(self, *args, **kwargs):  # type: ignore
        if self.departure_time and self.arrival_time and not self.duration:
            self.duration = self.calculate_duration()
        super().save(*args, **kwargs)


class Hotel(models.Model):
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    stars = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    description = models.TextField()
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    cheapest_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class Room(models.Model):
    """Room type of a hotel; physical rooms are its ``room_numbers``."""

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    title = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    max_people = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    description = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["hotel", "title"]

    def __str__(self) -> str:
        return f"{self.title} @ {self.hotel.name}"


class RoomNumber(models.Model):
    """A physical room and the calendar days on which it is taken."""

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="room_numbers")
    number = models.PositiveIntegerField()
    unavailable_dates = models.JSONField(default=list, blank=True, validators=[validate_calendar_days])

    class Meta:
        verbose_name = _("Room number")
        verbose_name_plural = _("Room numbers")
        ordering = ["room", "number"]
        constraints = [
            models.UniqueConstraint(fields=["room", "number"], name="unique_room_number_per_room"),
        ]

    def __str__(self) -> str:
        return f"#{self.number} ({self.room.title})"


class Car(models.Model):
    class FuelType(models.TextChoices):
        PETROL = "petrol", _("Petrol")
        DIESEL = "diesel", _("Diesel")
        ELECTRIC = "electric", _("Electric")
        HYBRID = "hybrid", _("Hybrid")

    class Transmission(models.TextChoices):
        MANUAL = "manual", _("Manual")
        AUTOMATIC = "automatic", _("Automatic")

    brand = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(1900)])
    license_plate = models.CharField(max_length=20, unique=True)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices, default=FuelType.PETROL)
    transmission = models.CharField(max_length=20, choices=Transmission.choices, default=Transmission.AUTOMATIC)
    seats = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    description = models.TextField()
    images = models.JSONField(default=list, blank=True)
    location = models.CharField(max_length=255)
    unavailable_dates = models.JSONField(default=list, blank=True, validators=[validate_calendar_days])
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Car")
        verbose_name_plural = _("Cars")
        ordering = ["brand", "model"]

    def __str__(self) -> str:
        return f"{self.brand} {self.model} ({self.license_plate})"


class Tour(models.Model):
    """Guided tour offered on a fixed set of dates.

    Per-date capacity is not tracked: booking a tour never consumes a date.
    """

    class Difficulty(models.TextChoices):
        EASY = "easy", _("Easy")
        MEDIUM = "medium", _("Medium")
        HARD = "hard", _("Hard")

    title = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    duration = models.CharField(max_length=50)
    max_group_size = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, default=Difficulty.EASY)
    ratings_average = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    ratings_quantity = models.PositiveIntegerField(default=0)
    images = models.JSONField(default=list, blank=True)
    available_dates = models.JSONField(default=list, blank=True, validators=[validate_calendar_days])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Tour")
        verbose_name_plural = _("Tours")
        ordering = ["title"]

    def __str__(self) -> str:
        return f"{self.title} ({self.city})"
