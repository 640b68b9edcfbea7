"""
Booking error taxonomy.

Every failure of a booking operation is raised as one of these exceptions.
The API layer maps ``status_code`` onto the HTTP response.
"""

from __future__ import annotations

from typing import Any


class BookingError(Exception):
    """Base class for failures of a booking operation."""

    status_code = 400
    default_message = "Booking operation failed."

    def __init__(self, message: Any = None, **context: Any):
        self.message = message if message is not None else self.default_message
        self.context = context
        super().__init__(str(self.message))


class ValidationError(BookingError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Please provide all required booking fields."


class NotFoundError(BookingError):
    """A referenced user, booking or inventory item does not exist."""

    status_code = 404
    default_message = "Not found."


class ConflictError(BookingError):
    """Inventory is unavailable or the state transition is not allowed."""

    status_code = 409
    default_message = "The booking conflicts with the current state."


class ForbiddenError(BookingError):
    """The requester is neither the owner nor an administrator."""

    status_code = 403
    default_message = "You do not have permission to perform this action."


class InventoryDataError(BookingError):
    """The stored dates of an inventory unit cannot be read."""

    status_code = 500
    default_message = "The availability data of this item is invalid. Please contact support."
