"""
Booking unit of work.

One ``DjangoUnitOfWork`` block wraps one booking operation: the booking row
and the inventory rows it touches are written in a single
``transaction.atomic`` block. Events recorded with ``add_event`` reach the
message bus only once the outermost transaction has committed; a block that
raises discards them.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Transaction boundary for a booking operation

        with DjangoUnitOfWork() as uow:
            booking = booking_repo.get_by_id(booking_id, lock=True)
            ...
            booking_repo.save(booking)
            uow.add_event(BookingConfirmed(...))
    """

    def __init__(self):
        self._pending: List[DomainEvent] = []
        self._atomic = transaction.atomic()

    def __enter__(self):
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self._schedule_publish()
        else:
            logger.warning(
                f"Booking operation failed ({exc_type.__name__}), "
                f"rolled back with {len(self._pending)} unpublished events"
            )
            self._pending.clear()
        return self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._pending.append(event)

    def _schedule_publish(self):
        events, self._pending = self._pending, []
        if events:
            logger.debug(f"Scheduling {len(events)} events for after commit")
            transaction.on_commit(lambda: _publish(events))


def _publish(events: List[DomainEvent]):
    from shared.application.message_bus import message_bus

    logger.info(f"Publishing {len(events)} domain events after commit")
    try:
        message_bus.publish_events(events)
    except Exception as e:
        # The booking is already committed; delivery failures are only reported.
        logger.error(f"Error publishing events: {e}", exc_info=True)
