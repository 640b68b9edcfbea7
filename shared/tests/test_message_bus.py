"""Tests for the unit of work and the message bus."""

from __future__ import annotations

from dataclasses import dataclass
from unittest import mock

from django.test import TestCase

from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    name: str


class MessageBusTests(TestCase):
    def test_handlers_receive_events_in_registration_order(self) -> None:
        bus = MessageBus()
        calls = []
        first = lambda event: calls.append(("first", event.name))  # noqa: E731
        second = lambda event: calls.append(("second", event.name))  # noqa: E731
        bus.register_event_handler(SomethingHappened, first)
        bus.register_event_handler(SomethingHappened, second)
        bus.register_event_handler(SomethingHappened, first)

        bus.publish_events([SomethingHappened(name="a")])

        self.assertEqual(calls, [("first", "a"), ("second", "a")])
        self.assertEqual(len(bus.handlers_for(SomethingHappened)), 2)

    def test_failing_handler_does_not_stop_the_others(self) -> None:
        bus = MessageBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.register_event_handler(SomethingHappened, broken)
        bus.register_event_handler(SomethingHappened, received.append)

        bus.publish_events([SomethingHappened(name="b")])

        self.assertEqual([event.name for event in received], ["b"])

    def test_event_to_dict(self) -> None:
        event = SomethingHappened(name="c", aggregate_id=7)

        data = event.to_dict()

        self.assertEqual(data["event_type"], "SomethingHappened")
        self.assertEqual(data["aggregate_id"], 7)


class UnitOfWorkTests(TestCase):
    def test_events_are_published_after_commit(self) -> None:
        with mock.patch.object(message_bus, "publish_events") as publish:
            with self.captureOnCommitCallbacks(execute=True):
                with DjangoUnitOfWork() as uow:
                    uow.add_event(SomethingHappened(name="committed"))
                    publish.assert_not_called()

        publish.assert_called_once()
        (events,), _ = publish.call_args
        self.assertEqual([event.name for event in events], ["committed"])

    def test_events_are_discarded_on_rollback(self) -> None:
        with mock.patch.object(message_bus, "publish_events") as publish:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                with self.assertRaises(ValueError):
                    with DjangoUnitOfWork() as uow:
                        uow.add_event(SomethingHappened(name="lost"))
                        raise ValueError("abort")

        self.assertEqual(callbacks, [])
        publish.assert_not_called()

    def test_publish_failure_does_not_undo_the_commit(self) -> None:
        with mock.patch.object(message_bus, "publish_events", side_effect=RuntimeError("bus down")):
            with self.assertLogs("shared.application.uow", level="ERROR") as logs:
                with self.captureOnCommitCallbacks(execute=True):
                    with DjangoUnitOfWork() as uow:
                        uow.add_event(SomethingHappened(name="committed"))

        self.assertIn("bus down", logs.output[0])
