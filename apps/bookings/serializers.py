"""Serializers for the booking domain.

Input serializers accept the camelCase field names used by the web client
(``bookingType``, ``startDate``...) as well as snake_case. Output is
snake_case.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.inventory.repositories import DjangoInventoryRepository
from apps.inventory.serializers import RoomSerializer, serialize_item
from apps.users.serializers import UserShortSerializer
from shared.domain.exceptions import ValidationError as DomainValidationError

from .domain.availability import to_calendar_day
from .domain.entities import BookingType
from .models import Booking


class CamelCaseInputMixin:
    """Rename camelCase keys of the incoming payload to their snake_case field names."""

    aliases: dict[str, str] = {}

    def to_internal_value(self, data):  # type: ignore
        if hasattr(data, "items"):
            renamed = {}
            for key, value in data.items():
                field_name = self.aliases.get(key, key)
                if field_name in renamed and key != field_name:
                    continue
                renamed[field_name] = value
            data = renamed
        return super().to_internal_value(data)


class CalendarDateField(serializers.DateField):
    """Accepts dates and full ISO datetimes; only the calendar day is kept."""

    def to_internal_value(self, value):  # type: ignore
        try:
            return to_calendar_day(value)
        except (TypeError, ValueError):
            self.fail("invalid", format="YYYY-MM-DD")


class BookingTypeField(serializers.CharField):
    """Booking type in any letter case, normalized to ``Flight``/``Hotel``/``Tour``/``Car``."""

    def to_internal_value(self, data):  # type: ignore
        value = super().to_internal_value(data)
        try:
            return BookingType.parse(value)
        except DomainValidationError as exc:
            raise serializers.ValidationError(str(exc.message))

    def to_representation(self, value):  # type: ignore
        return BookingType.parse(value).value


class BookingCreateSerializer(CamelCaseInputMixin, serializers.Serializer):
    """Booking request; type-specific requirements are checked by the create handler."""

    aliases = {
        "bookingType": "booking_type",
        "bookedItemId": "booked_item_id",
        "roomId": "room_id",
        "roomNumber": "room_number",
        "startDate": "start_date",
        "endDate": "end_date",
        "totalPrice": "total_price",
    }

    booking_type = BookingTypeField()
    booked_item_id = serializers.IntegerField(min_value=1)
    room_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    room_number = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    start_date = CalendarDateField()
    end_date = CalendarDateField(required=False, allow_null=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    passengers = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        end_date = attrs.get("end_date")
        if end_date is not None and end_date < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": ["End date must not be before start date."]})
        return attrs


class PaymentDetailsSerializer(CamelCaseInputMixin, serializers.Serializer):
    """Card details; the payment is stubbed so only their presence matters."""

    aliases = {
        "cardNumber": "card_number",
        "expiryDate": "expiry_date",
    }

    card_number = serializers.CharField(required=False, allow_blank=True, default="")
    expiry_date = serializers.CharField(required=False, allow_blank=True, default="")
    cvc = serializers.CharField(required=False, allow_blank=True, default="")


class BookingStatusUpdateSerializer(CamelCaseInputMixin, serializers.Serializer):
    aliases = {"paymentStatus": "payment_status"}

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False, allow_null=True)
    payment_status = serializers.ChoiceField(
        choices=Booking.PaymentStatus.choices,
        required=False,
        allow_null=True,
    )


class BookingListSerializer(serializers.ListSerializer):
    """Loads the booked items of a page with one query per booking type."""

    def to_representation(self, data):  # type: ignore
        bookings = list(data.all() if hasattr(data, "all") else data)
        inventory_repo = self.context.get("inventory_repo") or DjangoInventoryRepository()
        ids_by_type: dict[str, set[int]] = {}
        for booking in bookings:
            ids_by_type.setdefault(booking.booking_type, set()).add(booking.booked_item_id)
        self.context["booked_items"] = {
            (booking_type, item_id): item
            for booking_type, ids in ids_by_type.items()
            for item_id, item in inventory_repo.get_many(booking_type, ids).items()
        }
        return super().to_representation(bookings)


class BookingSerializer(serializers.ModelSerializer):
    """Booking with its owner, booked item and (for hotels) room expanded."""

    user = UserShortSerializer(read_only=True)
    booking_type = BookingTypeField(read_only=True)
    booked_item = serializers.SerializerMethodField()
    room = RoomSerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "user",
            "booking_type",
            "booked_item_id",
            "booked_item",
            "room",
            "room_number",
            "start_date",
            "end_date",
            "total_price",
            "passengers",
            "status",
            "payment_status",
            "payment_id",
            "inventory_applied",
            "hold_expires_at",
            "confirmed_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        list_serializer_class = BookingListSerializer

    def get_booked_item(self, obj: Booking):  # type: ignore
        preloaded = self.context.get("booked_items")
        if preloaded is not None:
            return serialize_item(preloaded.get((obj.booking_type, obj.booked_item_id)))
        inventory_repo = self.context.get("inventory_repo") or DjangoInventoryRepository()
        return serialize_item(inventory_repo.get_by_id(obj.booking_type, obj.booked_item_id))
