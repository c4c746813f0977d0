"""
Message Bus

Routes domain events to the handlers that apps register at startup
(see apps.bookings.apps.BookingsConfig.ready).
"""

from typing import Callable, Dict, List, Type

import structlog

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Event dispatcher

    Events: Multiple handlers per event (1:N)
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.warning("bus.unhandled_event", event_type=event_type.__name__)
                continue

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "bus.handler_failed",
                        event_type=event_type.__name__,
                        handler=getattr(handler, '__name__', repr(handler)),
                    )


# Global message bus instance
message_bus = MessageBus()
