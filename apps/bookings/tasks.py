"""Celery tasks for the storage booking lifecycle."""

from __future__ import annotations

import structlog
from celery import shared_task  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import BookingStateError

from .models import Booking

logger = structlog.get_logger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat, see config/celery.py)
# ============================================================================

@shared_task(name="bookings.activate_started_bookings")
def activate_started_bookings() -> dict[str, int]:
    """
    Move confirmed bookings into storage once their start date arrives.

    Returns:
        dict: {"activated": number of bookings moved to ACTIVE}
    """
    today = timezone.localdate()
    activated = 0

    bookings_to_start = Booking.objects.filter(
        status=Booking.Status.CONFIRMED,
        start_date__lte=today,
    )

    for booking in bookings_to_start:
        try:
            with transaction.atomic():
                booking.mark_active()
        except BookingStateError:
            logger.warning("booking.activate_skipped", booking_code=booking.booking_code, status=booking.status)
            continue
        activated += 1
        logger.info("booking.activated", booking_code=booking.booking_code)

    if activated:
        logger.info("bookings.activated", count=activated)
    return {"activated": activated}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Complete bookings whose end date has passed. The end date is exclusive,
    so a booking ending today no longer occupies capacity.

    Returns:
        dict: {"completed": number of bookings moved to COMPLETED}
    """
    today = timezone.localdate()
    completed = 0

    bookings_to_complete = Booking.objects.filter(
        status__in=Booking.OCCUPYING_STATUSES,
        end_date__lte=today,
    )

    for booking in bookings_to_complete:
        try:
            with transaction.atomic():
                booking.mark_completed()
        except BookingStateError:
            logger.warning("booking.complete_skipped", booking_code=booking.booking_code, status=booking.status)
            continue
        completed += 1
        logger.info("booking.completed", booking_code=booking.booking_code)

    if completed:
        logger.info("bookings.completed", count=completed)
    return {"completed": completed}
