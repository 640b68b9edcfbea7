"""Integration tests for booking API endpoints."""

from __future__ import annotations

from django.db import connection
from django.test import override_settings
from django.test.utils import CaptureQueriesContext
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.inventory.models import Car
from apps.users.models import User

from .factories import make_car, make_flight, make_hotel_with_rooms, make_tour, make_user


class BookingAPITests(APITestCase):
    """Covers creation, conflicts, payment, cancellation and the admin surface."""

    def setUp(self) -> None:
        self.user = make_user()
        self.admin = make_user(role=User.RoleChoices.ADMIN)
        self.flight = make_flight(available_seats=2)
        self.car = make_car()
        self.client.force_authenticate(self.user)
        self.list_url = reverse("booking-list")

    def _car_payload(self, **extra) -> dict:
        payload = {
            "bookingType": "car",
            "bookedItemId": self.car.pk,
            "startDate": "2025-08-01T00:00:00.000Z",
            "endDate": "2025-08-03",
            "totalPrice": "135.00",
        }
        payload.update(extra)
        return payload

    def _create_car_booking(self) -> dict:
        response = self.client.post(self.list_url, self._car_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data["data"]

    def test_unauthenticated_request_is_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._car_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertIn("message", response.data)

    def test_create_accepts_camel_case_and_expands_item(self) -> None:
        data = self._create_car_booking()

        self.assertEqual(data["booking_type"], "Car")
        self.assertEqual(data["start_date"], "2025-08-01")
        self.assertEqual(data["end_date"], "2025-08-03")
        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["payment_status"], "pending")
        self.assertEqual(data["booked_item"]["license_plate"], self.car.license_plate)
        self.assertEqual(data["user"]["email"], self.user.email)
        self.assertIsNone(data["room"])

    def test_create_accepts_snake_case(self) -> None:
        payload = {
            "booking_type": "FLIGHT",
            "booked_item_id": self.flight.pk,
            "start_date": "2025-09-01",
            "total_price": "500.00",
            "passengers": 2,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["booked_item"]["available_seats"], 0)

    def test_hotel_booking_expands_room(self) -> None:
        hotel, room, _ = make_hotel_with_rooms((101,))
        payload = {
            "bookingType": "Hotel",
            "bookedItemId": hotel.pk,
            "roomId": room.pk,
            "roomNumber": 101,
            "startDate": "2025-07-20",
            "endDate": "2025-07-22",
            "totalPrice": "450.00",
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        data = response.data["data"]
        self.assertEqual(data["room"]["id"], room.pk)
        self.assertEqual(data["room_number"], 101)
        self.assertEqual(data["booked_item"]["name"], hotel.name)

    def test_offset_start_date_lands_on_the_utc_day(self) -> None:
        response = self.client.post(
            self.list_url,
            self._car_payload(startDate="2025-07-31T23:30:00-05:00"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["start_date"], "2025-08-01")

    def test_malformed_stored_dates_return_an_error_envelope(self) -> None:
        Car.objects.filter(pk=self.car.pk).update(unavailable_dates=["2025/09/01"])

        response = self.client.post(self.list_url, self._car_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(response.data["success"])
        self.assertIn("availability data", response.data["message"])
        self.assertFalse(Booking.objects.exists())

    def test_missing_required_fields_is_bad_request(self) -> None:
        response = self.client.post(self.list_url, {"bookingType": "Car"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("booked_item_id", response.data["errors"])
        self.assertNotIn("stack", response.data)

    def test_type_specific_fields_are_required(self) -> None:
        response = self.client.post(self.list_url, self._car_payload(endDate=None), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data["message"])

    def test_unknown_booking_type_is_bad_request(self) -> None:
        response = self.client.post(self.list_url, self._car_payload(bookingType="boat"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("booking_type", response.data["errors"])

    def test_unavailable_inventory_is_conflict(self) -> None:
        self._create_car_booking()

        response = self.client.post(self.list_url, self._car_payload(startDate="2025-08-03"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["success"], False)
        self.assertIn("not available", response.data["message"])

    def test_unknown_item_is_not_found(self) -> None:
        response = self.client.post(self.list_url, self._car_payload(bookedItemId=99999), format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

    def test_confirm_payment_then_cancel(self) -> None:
        booking = self._create_car_booking()
        confirm_url = reverse("booking-confirm-payment", args=[booking["id"]])
        cancel_url = reverse("booking-cancel", args=[booking["id"]])

        response = self.client.put(
            confirm_url,
            {"cardNumber": "4242424242424242", "expiryDate": "12/30", "cvc": "123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["status"], "confirmed")
        self.assertEqual(response.data["data"]["payment_status"], "paid")
        self.assertRegex(response.data["data"]["payment_id"], r"^PAY_\d+_[A-Z0-9]{8}$")
        self.car.refresh_from_db()
        self.assertEqual(len(self.car.unavailable_dates), 3)

        response = self.client.put(cancel_url, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["status"], "cancelled")
        self.assertEqual(response.data["data"]["payment_status"], "refunded")
        self.car.refresh_from_db()
        self.assertEqual(self.car.unavailable_dates, [])

        response = self.client.put(cancel_url, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_confirm_payment_requires_card_details(self) -> None:
        booking = self._create_car_booking()

        response = self.client.put(
            reverse("booking-confirm-payment", args=[booking["id"]]),
            {"cardNumber": "4242424242424242"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Booking.objects.get(pk=booking["id"]).status, Booking.Status.PENDING)

    def test_owner_can_retrieve_stranger_cannot(self) -> None:
        booking = self._create_car_booking()
        detail_url = reverse("booking-detail", args=[booking["id"]])

        response = self.client.get(detail_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["booking_code"], booking["booking_code"])

        self.client.force_authenticate(make_user())
        response = self.client.get(detail_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data["success"])

        self.client.force_authenticate(self.admin)
        response = self.client.get(detail_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_unknown_booking_is_not_found(self) -> None:
        response = self.client.get(reverse("booking-detail", args=[99999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Booking not found.")

    def test_my_bookings_lists_only_own(self) -> None:
        self._create_car_booking()
        other = make_user()
        tour = make_tour()
        self.client.force_authenticate(other)
        self.client.post(
            self.list_url,
            {"bookingType": "tour", "bookedItemId": tour.pk, "startDate": "2025-09-10", "totalPrice": "180", "passengers": 1},
            format="json",
        )

        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("booking-my"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["data"][0]["booking_type"], "Car")

    def _count_queries_for_my_bookings(self) -> int:
        with CaptureQueriesContext(connection) as captured:
            response = self.client.get(reverse("booking-my"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return len(captured)

    def test_my_bookings_loads_items_per_type_not_per_booking(self) -> None:
        self._create_car_booking()
        hotel, room, _ = make_hotel_with_rooms((101, 102))
        self.client.post(
            self.list_url,
            {"bookingType": "hotel", "bookedItemId": hotel.pk, "roomId": room.pk, "roomNumber": 101,
             "startDate": "2025-07-20", "endDate": "2025-07-22", "totalPrice": "450"},
            format="json",
        )
        baseline = self._count_queries_for_my_bookings()

        for _ in range(3):
            self.client.post(self.list_url, self._car_payload(bookedItemId=make_car().pk), format="json")
        self.client.post(
            self.list_url,
            {"bookingType": "hotel", "bookedItemId": hotel.pk, "roomId": room.pk, "roomNumber": 102,
             "startDate": "2025-07-20", "endDate": "2025-07-22", "totalPrice": "450"},
            format="json",
        )

        self.assertEqual(Booking.objects.filter(user=self.user).count(), 6)
        self.assertEqual(self._count_queries_for_my_bookings(), baseline)
        response = self.client.get(reverse("booking-my"))
        plates = {item["booked_item"].get("license_plate") for item in response.data["data"]}
        self.assertEqual(len(plates - {None}), 4)

    def test_list_all_is_admin_only_and_filterable(self) -> None:
        self._create_car_booking()
        self.client.post(
            self.list_url,
            {"bookingType": "flight", "bookedItemId": self.flight.pk, "startDate": "2025-09-01",
             "totalPrice": "250", "passengers": 1},
            format="json",
        )

        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

        response = self.client.get(self.list_url, {"booking_type": "FLIGHT"})
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["data"][0]["booking_type"], "Flight")

        response = self.client.get(self.list_url, {"status": "confirmed"})
        self.assertEqual(response.data["count"], 0)

    def test_status_override(self) -> None:
        booking = self._create_car_booking()
        status_url = reverse("booking-update-status", args=[booking["id"]])

        response = self.client.put(status_url, {"status": "completed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.put(status_url, {"paymentStatus": "paid"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["status"], "pending")
        self.assertEqual(response.data["data"]["payment_status"], "paid")

        response = self.client.put(status_url, {"status": "archived"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(DEBUG=True)
    def test_stack_is_included_in_debug(self) -> None:
        response = self.client.get(reverse("booking-detail", args=[99999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("NotFoundError", response.data["stack"])


class TokenAuthTests(APITestCase):
    def test_obtain_token_and_call_api(self) -> None:
        user = make_user(email="jwt@example.com", password="StrongPass123")

        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "jwt@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get(reverse("booking-my"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 0)
        self.assertEqual(user.bookings.count(), 0)

    def test_wrong_password_is_unauthorized(self) -> None:
        make_user(email="jwt2@example.com", password="StrongPass123")

        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "jwt2@example.com", "password": "nope"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
