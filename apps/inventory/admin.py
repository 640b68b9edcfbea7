"""Admin registrations for inventory: the CRUD surface for flights, hotels, cars and tours."""

from __future__ import annotations

from django.contrib import admin

from .models import Car, Flight, Hotel, Room, RoomNumber, Tour


@admin.register(Flight)
class FlightAdmin(admin.ModelAdmin):
    list_display = (
        "flight_number",
        "airline",
        "origin",
        "destination",
        "departure_time",
        "available_seats",
        "total_seats",
        "status",
    )
    list_filter = ("status", "airline", "stops")
    search_fields = ("flight_number", "airline", "origin", "destination")
    readonly_fields = ("duration", "created_at", "updated_at")


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("title", "price", "max_people")


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "stars", "cheapest_price")
    list_filter = ("stars", "country")
    search_fields = ("name", "city", "address")
    inlines = (RoomInline,)
    readonly_fields = ("created_at", "updated_at")


class RoomNumberInline(admin.TabularInline):
    model = RoomNumber
    extra = 0
    fields = ("number", "unavailable_dates")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("title", "hotel", "price", "max_people")
    search_fields = ("title", "hotel__name")
    inlines = (RoomNumberInline,)


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ("brand", "model", "year", "license_plate", "daily_rate", "location", "is_available")
    list_filter = ("fuel_type", "transmission", "is_available")
    search_fields = ("brand", "model", "license_plate", "location")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Tour)
class TourAdmin(admin.ModelAdmin):
    list_display = ("title", "city", "country", "price", "difficulty", "max_group_size")
    list_filter = ("difficulty", "country")
    search_fields = ("title", "city")
    readonly_fields = ("created_at", "updated_at")
