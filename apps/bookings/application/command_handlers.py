"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new booking (status pending)
- ConfirmPaymentCommand: Accept payment and confirm a booking
- CancelBookingCommand: Cancel a booking and restore inventory
- UpdateBookingStatusCommand: Administrative status override

Every handler runs inside one DjangoUnitOfWork: the booking write and the
inventory mutation commit together or not at all, and domain events are
published only after the commit.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
import logging
import secrets
import string
import time

from django.conf import settings
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ForbiddenError, NotFoundError, ValidationError
from apps.bookings.domain.entities import BookedItemRef, BookingType, Requester
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    BookingStatusOverridden,
)
from apps.bookings.domain.inventory import policy_for
from apps.bookings.domain.state_machine import (
    InventoryIntent,
    cancel,
    confirm_payment,
    override,
)

logger = logging.getLogger(__name__)

PAYMENT_ID_ALPHABET = string.ascii_uppercase + string.digits


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    This is the primary entry point for creating bookings. Fields that are
    only required for some booking types default to None.
    """
    user_id: int
    booking_type: str
    booked_item_id: int | None
    start_date: date | None
    total_price: Decimal | None
    end_date: date | None = None
    passengers: int | None = None
    room_id: int | None = None
    room_number: int | None = None


@dataclass
class ConfirmPaymentCommand:
    """Command to confirm a booking with (stubbed) card details"""
    booking_id: int
    requester: Requester
    card_number: str = ''
    expiry_date: str = ''
    cvc: str = ''


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int
    requester: Requester


@dataclass
class UpdateBookingStatusCommand:
    """Command to override status fields (admin only)"""
    booking_id: int
    requester: Requester
    status: str | None = None
    payment_status: str | None = None


def generate_payment_id() -> str:
    """Opaque payment identifier: PAY_<epoch millis>_<8 upper-case alphanumerics>"""
    suffix = ''.join(secrets.choice(PAYMENT_ID_ALPHABET) for _ in range(8))
    return f"PAY_{int(time.time() * 1000)}_{suffix}"


def _load_for_requester(booking_repo, booking_id, requester: Requester):
    """Load and lock a booking, enforcing owner-or-admin access."""
    booking = booking_repo.get_by_id(booking_id, lock=True)
    if booking is None:
        raise NotFoundError("Booking not found.", booking_id=booking_id)
    if not requester.can_access(booking.user_id):
        raise ForbiddenError(
            "You do not have permission to access this booking.",
            booking_id=booking_id,
            user_id=requester.user_id,
        )
    return booking


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate required fields for the booking type
    2. Start database transaction (atomic)
    3. Check availability through the type's inventory policy; Hotel and Car
       units are locked (SELECT FOR UPDATE) and live pending holds count as taken
    4. Flight seats are taken right away with one conditional UPDATE
    5. Persist the booking as (pending, pending); Hotel and Car bookings get a hold
    6. Commit, then publish BookingCreated
    """

    def __init__(self, booking_repo, inventory_repo, user_repo):
        self.booking_repo = booking_repo
        self.inventory_repo = inventory_repo
        self.user_repo = user_repo

    def handle(self, command: CreateBookingCommand):
        """
        Handle booking creation

        Returns: the created Booking

        Raises:
            ValidationError: missing or malformed fields
            NotFoundError: user or inventory item does not exist
            ConflictError: the inventory unit is not available
        """
        booking_type = BookingType.parse(command.booking_type)
        self._validate(command, booking_type)

        passengers = command.passengers if command.passengers is not None else 1

        if self.user_repo.get_by_id(command.user_id) is None:
            raise NotFoundError("User not found.", user_id=command.user_id)

        ref = BookedItemRef(
            booking_type=booking_type,
            item_id=command.booked_item_id,
            room_id=command.room_id if booking_type is BookingType.HOTEL else None,
            room_number=command.room_number if booking_type is BookingType.HOTEL else None,
        )

        logger.info(
            f"Creating {booking_type.value} booking for user {command.user_id}: "
            f"{ref}, {command.start_date} - {command.end_date}, passengers {passengers}"
        )

        from apps.bookings.models import Booking

        with DjangoUnitOfWork() as uow:
            policy = policy_for(booking_type, self.inventory_repo, self.booking_repo)
            policy.check_availability(ref, command.start_date, command.end_date, passengers)

            booking = Booking(
                user_id=command.user_id,
                booking_type=booking_type.value,
                booked_item_id=ref.item_id,
                room_id=ref.room_id,
                room_number=ref.room_number,
                start_date=command.start_date,
                end_date=command.end_date,
                total_price=command.total_price,
                passengers=passengers,
            )
            if booking_type.uses_date_range:
                booking.hold_expires_at = timezone.now() + timedelta(minutes=settings.BOOKING_HOLD_MINUTES)

            booking.inventory_applied = policy.reserve_at_creation(booking)
            self.booking_repo.add(booking)

            uow.add_event(BookingCreated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                booking_type=booking.booking_type,
                booked_item_id=booking.booked_item_id,
                start_date=booking.start_date,
                end_date=booking.end_date,
            ))

        logger.info(f"Booking created successfully: {booking.booking_code} (ID: {booking.pk})")
        return booking

    def _validate(self, command: CreateBookingCommand, booking_type: BookingType):
        missing = []
        if command.booked_item_id is None:
            missing.append('booked_item_id')
        if command.start_date is None:
            missing.append('start_date')
        if command.total_price is None:
            missing.append('total_price')
        if booking_type.uses_date_range and command.end_date is None:
            missing.append('end_date')
        if booking_type.counts_passengers and command.passengers is None:
            missing.append('passengers')
        if booking_type is BookingType.HOTEL:
            if command.room_id is None:
                missing.append('room_id')
            if command.room_number is None:
                missing.append('room_number')
        if missing:
            raise ValidationError(
                f"Please provide all required fields for a {booking_type.value} booking: {', '.join(missing)}.",
                missing=missing,
            )

        if command.end_date is not None and command.end_date < command.start_date:
            raise ValidationError("End date must not be before start date.")
        if command.total_price < 0:
            raise ValidationError("Total price must not be negative.")
        if command.passengers is not None and command.passengers < 1:
            raise ValidationError("Passengers must be at least 1.")


class ConfirmPaymentHandler:
    """
    Handler for confirming payment

    The payment itself is stubbed: card details are only checked for
    presence. Hotel and Car dates are blocked in the same transaction.
    """

    def __init__(self, booking_repo, inventory_repo):
        self.booking_repo = booking_repo
        self.inventory_repo = inventory_repo

    def handle(self, command: ConfirmPaymentCommand):
        logger.info(f"Confirming payment for booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_for_requester(self.booking_repo, command.booking_id, command.requester)

            missing = [
                name for name in ('card_number', 'expiry_date', 'cvc')
                if not str(getattr(command, name) or '').strip()
            ]
            if missing:
                raise ValidationError(
                    "Please provide complete payment details.",
                    missing=missing,
                )

            transition = confirm_payment(booking.state)

            if transition.intent is InventoryIntent.COMMIT and not booking.inventory_applied:
                policy = policy_for(booking.item_ref.booking_type, self.inventory_repo, self.booking_repo)
                booking.inventory_applied = policy.commit_at_confirmation(booking)

            booking.state = transition.state
            booking.payment_id = generate_payment_id()
            booking.confirmed_at = timezone.now()
            booking.hold_expires_at = None
            self.booking_repo.save(booking)

            uow.add_event(BookingConfirmed(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                payment_id=booking.payment_id,
            ))

        logger.info(f"Booking {booking.booking_code} confirmed with payment {booking.payment_id}")
        return booking


class CancelBookingHandler:
    """Handler for cancelling a booking and restoring its inventory"""

    def __init__(self, booking_repo, inventory_repo):
        self.booking_repo = booking_repo
        self.inventory_repo = inventory_repo

    def handle(self, command: CancelBookingCommand):
        logger.info(f"Cancelling booking {command.booking_id} (requested by user {command.requester.user_id})")

        with DjangoUnitOfWork() as uow:
            booking = _load_for_requester(self.booking_repo, command.booking_id, command.requester)

            old_state = booking.state
            transition = cancel(old_state)

            released = False
            if transition.intent is InventoryIntent.RELEASE and booking.inventory_applied:
                # Uses the stored dates and passenger count of the booking.
                policy = policy_for(booking.item_ref.booking_type, self.inventory_repo, self.booking_repo)
                policy.release_at_cancellation(booking)
                booking.inventory_applied = False
                released = True

            booking.state = transition.state
            booking.cancelled_at = timezone.now()
            booking.hold_expires_at = None
            self.booking_repo.save(booking)

            uow.add_event(BookingCancelled(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                old_status=old_state.status.value,
                payment_status=booking.payment_status,
                inventory_released=released,
            ))

        logger.info(f"Booking {booking.booking_code} cancelled successfully")
        return booking


class UpdateBookingStatusHandler:
    """
    Handler for the administrative status override

    Replaces status and/or payment_status as given. Inventory is never
    touched, whatever the new state.
    """

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: UpdateBookingStatusCommand):
        if not command.requester.is_admin:
            raise ForbiddenError("Only administrators can change a booking status.")

        with DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)
            if booking is None:
                raise NotFoundError("Booking not found.", booking_id=command.booking_id)

            old_state = booking.state
            transition = override(old_state, command.status, command.payment_status)
            booking.state = transition.state
            self.booking_repo.save(booking)

            uow.add_event(BookingStatusOverridden(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                old_state=str(old_state),
                new_state=str(transition.state),
            ))

        logger.warning(
            f"Booking {booking.booking_code} status overridden by user {command.requester.user_id}: "
            f"{old_state} -> {transition.state}"
        )
        return booking
