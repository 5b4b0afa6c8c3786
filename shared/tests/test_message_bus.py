"""Tests for the in-process event bus."""

from dataclasses import dataclass

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent


@dataclass
class ThingHappened(DomainEvent):
    name: str


@dataclass
class OtherThingHappened(DomainEvent):
    pass


def test_handlers_called_in_registration_order():
    bus = MessageBus()
    calls = []

    def first(event):
        calls.append(("first", event.name))

    def second(event):
        calls.append(("second", event.name))

    bus.register_event_handler(ThingHappened, first)
    bus.register_event_handler(ThingHappened, second)
    bus.publish_events([ThingHappened(name="a"), OtherThingHappened()])

    assert calls == [("first", "a"), ("second", "a")]


def test_duplicate_registration_is_ignored():
    bus = MessageBus()
    calls = []

    def handler(event):
        calls.append(event)

    bus.register_event_handler(ThingHappened, handler)
    bus.register_event_handler(ThingHappened, handler)
    bus.publish_events([ThingHappened(name="a")])

    assert len(calls) == 1


def test_failing_handler_does_not_stop_others():
    bus = MessageBus()
    calls = []

    def broken(event):
        raise RuntimeError("boom")

    def working(event):
        calls.append(event.name)

    bus.register_event_handler(ThingHappened, broken)
    bus.register_event_handler(ThingHappened, working)
    bus.publish_events([ThingHappened(name="a")])

    assert calls == ["a"]


def test_unregister():
    bus = MessageBus()
    calls = []

    def handler(event):
        calls.append(event)

    bus.register_event_handler(ThingHappened, handler)
    bus.unregister_event_handler(ThingHappened, handler)
    bus.unregister_event_handler(OtherThingHappened, handler)
    bus.publish_events([ThingHappened(name="a")])

    assert calls == []
    assert bus.handlers_for(ThingHappened) == []


def test_event_serialises_to_dict():
    event = ThingHappened(name="a", aggregate_id=7)

    data = event.to_dict()

    assert data["event_type"] == "ThingHappened"
    assert data["aggregate_id"] == 7
    assert data["name"] == "a"
