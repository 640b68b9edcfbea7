"""Tests for booking state transitions."""

from __future__ import annotations

import pytest

from apps.bookings.domain.entities import BookingStatus, PaymentStatus
from apps.bookings.domain.state_machine import (
    INITIAL_STATE,
    BookingState,
    InventoryIntent,
    cancel,
    confirm_payment,
    override,
)
from shared.domain.exceptions import ConflictError, ValidationError

CONFIRMED = BookingState(BookingStatus.CONFIRMED, PaymentStatus.PAID)
CANCELLED = BookingState(BookingStatus.CANCELLED, PaymentStatus.PENDING)
REFUNDED = BookingState(BookingStatus.CANCELLED, PaymentStatus.REFUNDED)
COMPLETED = BookingState(BookingStatus.COMPLETED, PaymentStatus.PAID)


def test_initial_state_is_pending_pending():
    assert INITIAL_STATE == BookingState.of("pending", "pending")


def test_confirm_payment_from_initial_state_commits_inventory():
    transition = confirm_payment(INITIAL_STATE)

    assert transition.state == CONFIRMED
    assert transition.intent is InventoryIntent.COMMIT


@pytest.mark.parametrize("state", [CONFIRMED, CANCELLED, REFUNDED, COMPLETED])
def test_confirm_payment_rejects_paid_or_closed_bookings(state):
    with pytest.raises(ConflictError):
        confirm_payment(state)


def test_cancel_pending_keeps_payment_pending():
    transition = cancel(INITIAL_STATE)

    assert transition.state == CANCELLED
    assert transition.intent is InventoryIntent.RELEASE


def test_cancel_paid_booking_refunds():
    transition = cancel(CONFIRMED)

    assert transition.state == REFUNDED
    assert transition.intent is InventoryIntent.RELEASE


@pytest.mark.parametrize("state", [CANCELLED, REFUNDED, COMPLETED])
def test_cancel_rejects_cancelled_and_completed(state):
    with pytest.raises(ConflictError):
        cancel(state)


def test_override_keeps_absent_half():
    transition = override(CONFIRMED, status="completed")

    assert transition.state == COMPLETED
    assert transition.intent is InventoryIntent.NONE


def test_override_payment_only():
    transition = override(INITIAL_STATE, payment_status="paid")

    assert transition.state == BookingState(BookingStatus.PENDING, PaymentStatus.PAID)


def test_override_rejects_unknown_values():
    with pytest.raises(ValidationError):
        override(INITIAL_STATE, status="archived")
    with pytest.raises(ValidationError):
        override(INITIAL_STATE, payment_status="chargeback")
