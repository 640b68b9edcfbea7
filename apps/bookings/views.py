"""API views for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.inventory.repositories import DjangoInventoryRepository
from apps.users.repositories import DjangoUserRepository
from shared.domain.exceptions import NotFoundError

from .application import queries
from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    ConfirmPaymentCommand,
    ConfirmPaymentHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    UpdateBookingStatusCommand,
    UpdateBookingStatusHandler,
)
from .domain.entities import Requester
from .filters import BookingFilterSet
from .models import Booking
from .repositories import DjangoBookingRepository
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusUpdateSerializer,
    PaymentDetailsSerializer,
)

logger = logging.getLogger(__name__)


def requester_from(request) -> Requester:
    user = request.user
    return Requester(user_id=user.pk, is_admin=user.is_admin_role())


class BookingViewSet(viewsets.GenericViewSet):
    """Booking lifecycle endpoints: create, read, pay, cancel and admin override."""

    queryset = Booking.objects.all()
    serializer_class = BookingSerializer
    filterset_class = BookingFilterSet

    def __init__(self, **kwargs):  # type: ignore
        super().__init__(**kwargs)
        self.booking_repo = DjangoBookingRepository()
        self.inventory_repo = DjangoInventoryRepository()
        self.user_repo = DjangoUserRepository()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "confirm_payment":
            return PaymentDetailsSerializer
        if self.action == "update_status":
            return BookingStatusUpdateSerializer
        return BookingSerializer

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["inventory_repo"] = self.inventory_repo
        return context

    def _respond(self, booking, message=None, status_code=status.HTTP_200_OK):
        body = {"success": True, "data": BookingSerializer(booking, context=self.get_serializer_context()).data}
        if message:
            body["message"] = message
        return Response(body, status=status_code)

    def _respond_many(self, bookings):
        data = BookingSerializer(bookings, many=True, context=self.get_serializer_context()).data
        return Response({"success": True, "count": len(data), "data": data})

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = CreateBookingHandler(self.booking_repo, self.inventory_repo, self.user_repo).handle(
            CreateBookingCommand(user_id=request.user.pk, **serializer.validated_data)
        )
        return self._respond(booking, "Booking created successfully.", status.HTTP_201_CREATED)

    def list(self, request, *args, **kwargs):  # type: ignore
        bookings = queries.list_all_bookings(self.booking_repo, requester_from(request))
        return self._respond_many(self.filter_queryset(bookings))

    @action(detail=False, methods=["get"])
    def my(self, request):  # type: ignore
        return self._respond_many(queries.list_my_bookings(self.booking_repo, requester_from(request)))

    def retrieve(self, request, pk=None):  # type: ignore
        booking = queries.get_booking(self.booking_repo, self._booking_id(pk), requester_from(request))
        return self._respond(booking)

    @action(detail=True, methods=["put"], url_path="confirm-payment")
    def confirm_payment(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = ConfirmPaymentHandler(self.booking_repo, self.inventory_repo).handle(
            ConfirmPaymentCommand(
                booking_id=self._booking_id(pk),
                requester=requester_from(request),
                **serializer.validated_data,
            )
        )
        return self._respond(booking, "Payment confirmed. Your booking is confirmed.")

    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = CancelBookingHandler(self.booking_repo, self.inventory_repo).handle(
            CancelBookingCommand(booking_id=self._booking_id(pk), requester=requester_from(request))
        )
        return self._respond(booking, "Booking cancelled successfully.")

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = UpdateBookingStatusHandler(self.booking_repo).handle(
            UpdateBookingStatusCommand(
                booking_id=self._booking_id(pk),
                requester=requester_from(request),
                status=serializer.validated_data.get("status"),
                payment_status=serializer.validated_data.get("payment_status"),
            )
        )
        return self._respond(booking, "Booking status updated.")

    @staticmethod
    def _booking_id(pk) -> int:
        try:
            return int(pk)
        except (TypeError, ValueError):
            raise NotFoundError("Booking not found.", booking_id=pk) from None
