"""
Booking Command Handlers

These are the use cases for the storage booking domain.
They orchestrate domain operations within transactions.

Commands:
- AdmitBookingCommand: Admit a booking if it fits remaining capacity
- CancelBookingCommand: Cancel a booking and release its capacity
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import structlog

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import InsufficientCapacityError
from shared.domain.value_objects import DateRange, to_decimal
from apps.bookings.domain.entities import ResourceType
from apps.bookings.domain.events import BookingAdmitted, BookingCancelled

logger = structlog.get_logger(__name__)


# ===== Commands =====

@dataclass
class AdmitBookingCommand:
    """
    Command to admit a new storage booking

    This is the primary entry point for creating bookings.
    """
    customer_id: int
    warehouse_id: int
    resource_type: str
    quantity: Decimal
    start_date: date
    end_date: date
    notes: str = ''


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int
    source: str
    reason: str = ''


# ===== Command Handlers =====

class AdmitBookingHandler:
    """
    Handler for AdmitBooking command

    Capacity check and insert happen in one transaction:
    1. Start database transaction (atomic)
    2. Lock the (warehouse, resource) pricing row with SELECT FOR UPDATE
    3. Recompute availability under the lock
    4. Price the booking, membership discount included
    5. Insert the booking as confirmed with its pricing snapshot
    6. Commit, then publish BookingAdmitted
    """

    def __init__(self, repository=None, calculator=None, pricing_engine=None):
        from apps.bookings import services

        self.repository = repository or services.build_repository()
        self.calculator = calculator or services.get_availability_calculator(self.repository)
        self.pricing_engine = pricing_engine or services.get_pricing_engine(self.repository)

    def handle(self, command: AdmitBookingCommand):
        """
        Handle booking admission

        Returns: Created Booking model instance

        Raises:
            InvalidRangeError, UnsupportedResourceError, WarehouseNotFoundError,
            QuantityOutOfRangeError, InsufficientCapacityError, DataAccessError
        """
        from apps.bookings.models import Booking

        resource_type = ResourceType.parse(command.resource_type)
        quantity = to_decimal(command.quantity)
        dates = DateRange(command.start_date, command.end_date)

        logger.info(
            "booking.admission_requested",
            customer_id=command.customer_id,
            warehouse_id=command.warehouse_id,
            resource_type=resource_type.value,
            quantity=str(quantity),
            dates=str(dates),
        )

        with DjangoUnitOfWork() as uow:
            self.repository.lock_resource(command.warehouse_id, resource_type)

            availability = self.calculator.calculate_availability(
                command.warehouse_id, resource_type, dates.start_date, dates.end_date
            )
            if not availability.fits(quantity):
                logger.info(
                    "booking.rejected",
                    warehouse_id=command.warehouse_id,
                    resource_type=resource_type.value,
                    requested=str(quantity),
                    available=str(availability.available_capacity),
                )
                raise InsufficientCapacityError(quantity, availability.available_capacity)

            breakdown = self.pricing_engine.quote(
                command.warehouse_id,
                resource_type,
                quantity,
                dates.start_date,
                dates.end_date,
                customer_id=command.customer_id,
            )

            booking = Booking(
                customer_id=command.customer_id,
                warehouse_id=command.warehouse_id,
                resource_type=resource_type.value,
                quantity=quantity,
                start_date=dates.start_date,
                end_date=dates.end_date,
                status=Booking.Status.CONFIRMED,
                notes=command.notes,
            )
            booking.apply_pricing(breakdown)
            booking.save()

            uow.add_event(BookingAdmitted(
                aggregate_id=booking.pk,
                booking_code=booking.booking_code,
                warehouse_id=command.warehouse_id,
                resource_type=resource_type.value,
                quantity=quantity,
                dates=dates,
                total=breakdown.total,
            ))

        logger.info(
            "booking.admitted",
            booking_code=booking.booking_code,
            booking_id=booking.pk,
            total=str(booking.total_amount),
        )
        return booking


class CancelBookingHandler:
    """Handler for cancelling a booking"""

    def handle(self, command: CancelBookingCommand):
        """Cancel booking; its capacity is free once the transaction commits"""
        from apps.bookings.models import Booking

        with DjangoUnitOfWork() as uow:
            booking = Booking.objects.select_for_update().get(pk=command.booking_id)
            booking.mark_cancelled(command.source, command.reason)

            uow.add_event(BookingCancelled(
                aggregate_id=booking.pk,
                booking_code=booking.booking_code,
                warehouse_id=booking.warehouse_id,
                reason=command.reason,
            ))

        logger.info(
            "booking.cancelled",
            booking_code=booking.booking_code,
            source=command.source,
        )
        return booking
