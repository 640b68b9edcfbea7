"""
Booking Queries

Read-side use cases. They return bookings (or querysets of bookings) and
enforce the same owner-or-admin rule as the commands.
"""

from __future__ import annotations

import logging

from shared.domain.exceptions import ForbiddenError, NotFoundError

from apps.bookings.domain.entities import Requester

logger = logging.getLogger(__name__)


def get_booking(booking_repo, booking_id: int, requester: Requester):
    booking = booking_repo.get_by_id(booking_id)
    if booking is None:
        raise NotFoundError("Booking not found.", booking_id=booking_id)
    if not requester.can_access(booking.user_id):
        raise ForbiddenError(
            "You do not have permission to access this booking.",
            booking_id=booking_id,
            user_id=requester.user_id,
        )
    return booking


def list_my_bookings(booking_repo, requester: Requester):
    """The requester's own bookings, newest first."""
    return booking_repo.list_for_user(requester.user_id)


def list_all_bookings(booking_repo, requester: Requester):
    """Every booking, newest first. Filtering is left to the caller."""
    if not requester.is_admin:
        logger.info(f"User {requester.user_id} tried to list all bookings")
        raise ForbiddenError("Only administrators can list all bookings.")
    return booking_repo.list_all()
