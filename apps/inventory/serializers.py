"""Read serializers used to expand the booked inventory item."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Car, Flight, Hotel, Room, RoomNumber, Tour


class FlightSerializer(serializers.ModelSerializer):
    class Meta:
        model = Flight
        fields = [
            "id",
            "airline",
            "flight_number",
            "origin",
            "destination",
            "departure_time",
            "arrival_time",
            "price",
            "available_seats",
            "total_seats",
            "duration",
            "stops",
            "status",
        ]
        read_only_fields = fields


class HotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "address",
            "city",
            "country",
            "stars",
            "amenities",
            "images",
            "cheapest_price",
        ]
        read_only_fields = fields


class RoomNumberSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomNumber
        fields = ["id", "number", "unavailable_dates"]
        read_only_fields = fields


class RoomSerializer(serializers.ModelSerializer):
    hotel_id = serializers.ReadOnlyField()
    room_numbers = RoomNumberSerializer(many=True, read_only=True)

    class Meta:
        model = Room
        fields = ["id", "hotel_id", "title", "price", "max_people", "description", "room_numbers"]
        read_only_fields = fields


class CarSerializer(serializers.ModelSerializer):
    class Meta:
        model = Car
        fields = [
            "id",
            "brand",
            "model",
            "year",
            "license_plate",
            "daily_rate",
            "fuel_type",
            "transmission",
            "seats",
            "location",
            "images",
            "unavailable_dates",
            "is_available",
        ]
        read_only_fields = fields


class TourSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tour
        fields = [
            "id",
            "title",
            "city",
            "country",
            "price",
            "duration",
            "max_group_size",
            "difficulty",
            "ratings_average",
            "ratings_quantity",
            "images",
            "available_dates",
        ]
        read_only_fields = fields


SERIALIZER_BY_MODEL = {
    Flight: FlightSerializer,
    Hotel: HotelSerializer,
    Car: CarSerializer,
    Tour: TourSerializer,
}


def serialize_item(item) -> dict | None:
    if item is None:
        return None
    return SERIALIZER_BY_MODEL[type(item)](item).data
