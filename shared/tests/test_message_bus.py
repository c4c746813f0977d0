from dataclasses import dataclass

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    name: str = ""


def test_handlers_receive_events_once_each():
    bus = MessageBus()
    seen = []

    def handler(event):
        seen.append(event.name)

    bus.register_event_handler(SomethingHappened, handler)
    bus.register_event_handler(SomethingHappened, handler)
    bus.publish_events([SomethingHappened(name="a"), SomethingHappened(name="b")])

    assert seen == ["a", "b"]
    assert bus.handlers_for(SomethingHappened) == [handler]


def test_failing_handler_does_not_stop_the_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, lambda event: seen.append(event))
    bus.publish_events([SomethingHappened()])

    assert len(seen) == 1


def test_event_serialization():
    event = SomethingHappened(aggregate_id=7, name="x")
    data = event.to_dict()
    assert data["event_type"] == "SomethingHappened"
    assert data["aggregate_id"] == 7
