"""
Booking State Machine

The lifecycle state of a booking is the pair (status, payment_status).

    (pending, pending)  --confirm_payment-->  (confirmed, paid)     intent: COMMIT
    (pending, pending)  --cancel-->           (cancelled, pending)  intent: RELEASE
    (confirmed, paid)   --cancel-->           (cancelled, refunded) intent: RELEASE

Cancelled and completed bookings cannot move on. Transitions are pure:
they return the next state together with the inventory side effect the
caller has to carry out, so the side effect can be applied (and tested)
separately from persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shared.domain.base import ValueObject
from shared.domain.exceptions import ConflictError, ValidationError

from .entities import BookingStatus, PaymentStatus


class InventoryIntent(Enum):
    NONE = 'none'
    COMMIT = 'commit'      # apply the deferred mutation (block dates)
    RELEASE = 'release'    # undo whatever mutation is in effect


@dataclass(frozen=True)
class BookingState(ValueObject):
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    @classmethod
    def of(cls, status, payment_status) -> 'BookingState':
        try:
            return cls(BookingStatus(status), PaymentStatus(payment_status))
        except ValueError as exc:
            raise ValidationError(str(exc)) from None

    def __str__(self):
        return f"({self.status.value}, {self.payment_status.value})"


@dataclass(frozen=True)
class Transition(ValueObject):
    state: BookingState
    intent: InventoryIntent = InventoryIntent.NONE


INITIAL_STATE = BookingState(BookingStatus.PENDING, PaymentStatus.PENDING)

_CONFIRM = {
    INITIAL_STATE: Transition(
        BookingState(BookingStatus.CONFIRMED, PaymentStatus.PAID), InventoryIntent.COMMIT
    ),
}


def confirm_payment(state: BookingState) -> Transition:
    """Payment is only accepted from (pending, pending)."""
    transition = _CONFIRM.get(state)
    if transition is None:
        raise ConflictError(
            "This booking has already been paid or cancelled.",
            state=str(state),
        )
    return transition


def cancel(state: BookingState) -> Transition:
    """Cancel from any pending or confirmed state; paid bookings become refunded."""
    if state.status is BookingStatus.CANCELLED:
        raise ConflictError("This booking has already been cancelled.", state=str(state))
    if state.status is BookingStatus.COMPLETED:
        raise ConflictError("A completed booking cannot be cancelled.", state=str(state))

    payment_status = (
        PaymentStatus.REFUNDED if state.payment_status is PaymentStatus.PAID else state.payment_status
    )
    return Transition(BookingState(BookingStatus.CANCELLED, payment_status), InventoryIntent.RELEASE)


def override(state: BookingState, status=None, payment_status=None) -> Transition:
    """Administrative correction: replace either half, never touch inventory."""
    next_state = BookingState.of(
        status if status else state.status.value,
        payment_status if payment_status else state.payment_status.value,
    )
    return Transition(next_state, InventoryIntent.NONE)
