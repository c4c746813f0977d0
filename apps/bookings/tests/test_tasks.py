from datetime import timedelta

import pytest
from django.utils import timezone

from apps.bookings.models import Booking
from apps.bookings.tasks import activate_started_bookings, complete_finished_bookings
from shared.domain.exceptions import BookingStateError

pytestmark = pytest.mark.django_db


def test_activate_started_bookings(make_booking):
    today = timezone.localdate()
    started = make_booking(10, today, today + timedelta(days=5))
    future = make_booking(10, today + timedelta(days=1), today + timedelta(days=5))
    pending = make_booking(10, today, today + timedelta(days=5), status=Booking.Status.PENDING)

    result = activate_started_bookings.delay().get()

    assert result == {"activated": 1}
    started.refresh_from_db()
    future.refresh_from_db()
    pending.refresh_from_db()
    assert started.status == Booking.Status.ACTIVE
    assert future.status == Booking.Status.CONFIRMED
    assert pending.status == Booking.Status.PENDING


def test_complete_finished_bookings(make_booking):
    today = timezone.localdate()
    ended_today = make_booking(10, today - timedelta(days=5), today, status=Booking.Status.ACTIVE)
    still_running = make_booking(10, today - timedelta(days=5), today + timedelta(days=1), status=Booking.Status.ACTIVE)
    cancelled = make_booking(10, today - timedelta(days=5), today, status=Booking.Status.CANCELLED)

    result = complete_finished_bookings()

    assert result == {"completed": 1}
    ended_today.refresh_from_db()
    still_running.refresh_from_db()
    cancelled.refresh_from_db()
    assert ended_today.status == Booking.Status.COMPLETED
    assert still_running.status == Booking.Status.ACTIVE
    assert cancelled.status == Booking.Status.CANCELLED


def test_lifecycle_methods_guard_transitions(make_booking):
    today = timezone.localdate()
    booking = make_booking(10, today, today + timedelta(days=1), status=Booking.Status.PENDING)

    with pytest.raises(BookingStateError):
        booking.mark_active()
    with pytest.raises(BookingStateError):
        booking.mark_completed()
