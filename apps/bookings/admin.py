"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "booking_type",
        "booked_item_id",
        "user",
        "status",
        "payment_status",
        "start_date",
        "end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("booking_type", "status", "payment_status", "inventory_applied")
    search_fields = ("booking_code", "payment_id", "user__email")
    readonly_fields = (
        "booking_code",
        "payment_id",
        "inventory_applied",
        "hold_expires_at",
        "confirmed_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
