"""Message-bus subscribers for booking events."""

from __future__ import annotations

import structlog

from shared.application.message_bus import message_bus

from .domain.events import BookingAdmitted, BookingCancelled

logger = structlog.get_logger(__name__)


def record_booking_admitted(event: BookingAdmitted) -> None:
    logger.info("audit.booking_admitted", **event.to_dict())


def record_booking_cancelled(event: BookingCancelled) -> None:
    logger.info("audit.booking_cancelled", **event.to_dict())


def register(bus=message_bus) -> None:
    bus.register_event_handler(BookingAdmitted, record_booking_admitted)
    bus.register_event_handler(BookingCancelled, record_booking_cancelled)
