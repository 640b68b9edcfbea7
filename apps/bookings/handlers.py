"""
Domain event handlers for bookings.

They run after the unit of work has committed. Only logging is done here;
this is where notification delivery would attach.
"""

import logging

from shared.application.message_bus import message_bus

from .domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    BookingStatusOverridden,
)

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated):
    logger.info(
        f"[event] booking {event.booking_id} created by user {event.user_id}: "
        f"{event.booking_type} {event.booked_item_id}, {event.start_date} - {event.end_date}"
    )


def log_booking_confirmed(event: BookingConfirmed):
    logger.info(f"[event] booking {event.booking_id} confirmed, payment {event.payment_id}")


def log_booking_cancelled(event: BookingCancelled):
    logger.info(
        f"[event] booking {event.booking_id} cancelled (was {event.old_status}), "
        f"payment {event.payment_status}, inventory released: {event.inventory_released}"
    )


def log_booking_status_overridden(event: BookingStatusOverridden):
    logger.info(f"[event] booking {event.booking_id} overridden: {event.old_state} -> {event.new_state}")


def register_handlers(bus=message_bus):
    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingConfirmed, log_booking_confirmed)
    bus.register_event_handler(BookingCancelled, log_booking_cancelled)
    bus.register_event_handler(BookingStatusOverridden, log_booking_status_overridden)
