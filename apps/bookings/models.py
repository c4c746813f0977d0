"""Booking models for the storage marketplace."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.entities import BillingUnit, ResourceType
from shared.domain.exceptions import BookingStateError
from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """Reservation of pallet slots or floor area for a half-open date range."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Requested, awaiting admission")
        CONFIRMED = "confirmed", _("Admitted")
        ACTIVE = "active", _("In storage")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class ResourceTypeChoices(models.TextChoices):
        PALLET = ResourceType.PALLET.value, _("Pallet slots")
        AREA = ResourceType.AREA.value, _("Floor area")

    class BillingUnitChoices(models.TextChoices):
        PER_UNIT_PER_DAY = BillingUnit.PER_UNIT_PER_DAY.value, _("Per unit per day")
        PER_UNIT_PER_WEEK = BillingUnit.PER_UNIT_PER_WEEK.value, _("Per unit per week")
        PER_UNIT_PER_MONTH = BillingUnit.PER_UNIT_PER_MONTH.value, _("Per unit per month")
        PER_UNIT_PER_YEAR = BillingUnit.PER_UNIT_PER_YEAR.value, _("Per unit per year")

    class CancellationSource(models.TextChoices):
        CUSTOMER = "customer", _("Customer")
        STAFF = "staff", _("Warehouse staff")
        SYSTEM = "system", _("System")

    # Statuses that consume warehouse capacity
    OCCUPYING_STATUSES = (Status.CONFIRMED, Status.ACTIVE)
    CANCELLABLE_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.ACTIVE)

    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="storage_bookings",
    )
    warehouse = models.ForeignKey(
        "warehouses.Warehouse",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    resource_type = models.CharField(max_length=16, choices=ResourceTypeChoices.choices)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Pallet count or square footage, matching the resource type."),
    )
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Exclusive: storage ends the day before."))
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    notes = models.TextField(blank=True)

    # Pricing snapshot at admission time
    currency = models.CharField(max_length=3, default="USD")
    unit_price = models.DecimalField(max_digits=12, decimal_places=4, default=Decimal("0"))
    billing_unit = models.CharField(max_length=32, choices=BillingUnitChoices.choices, blank=True)
    period_count = models.DecimalField(
        max_digits=12,
        decimal_places=6,
        default=Decimal("0"),
        help_text=_("Billing periods; yearly schedules store the day fraction to 6 places."),
    )
    base_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    volume_discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    volume_discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    membership_discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    membership_discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_source = models.CharField(max_length=16, choices=CancellationSource.choices, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="storage_booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="storage_booking_positive_quantity",
            ),
        ]
        indexes = [
            models.Index(
                fields=["warehouse", "resource_type", "start_date", "end_date"],
                name="booking_occupancy_idx",
            ),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code} at {self.warehouse_id}"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def occupies_capacity(self) -> bool:
        return self.status in self.OCCUPYING_STATUSES

    def clean(self) -> None:
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValidationError(_("End date must be after start date."))
        if self.quantity is not None and self.quantity <= 0:
            raise ValidationError(_("Quantity must be positive."))

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        self.clean()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    def apply_pricing(self, breakdown) -> None:
        """Copy a PricingBreakdown onto the snapshot columns."""
        self.currency = breakdown.currency
        self.unit_price = breakdown.unit_price.amount
        self.billing_unit = breakdown.billing_unit.value
        self.period_count = breakdown.period_count.quantize(Decimal("0.000001"))
        self.base_amount = breakdown.base_amount.amount
        self.volume_discount_percent = breakdown.volume_discount_percent
        self.volume_discount_amount = breakdown.volume_discount_amount.amount
        self.membership_discount_percent = breakdown.membership_discount_percent
        self.membership_discount_amount = breakdown.membership_discount_amount.amount
        self.total_amount = breakdown.total.amount

    def mark_cancelled(self, source: str, reason: str = "") -> None:
        if self.status not in self.CANCELLABLE_STATUSES:
            raise BookingStateError(f"Booking {self.booking_code} cannot be cancelled from {self.status}")
        self.status = self.Status.CANCELLED
        self.cancellation_source = source
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancellation_source", "cancellation_reason", "cancelled_at", "updated_at"])

    def mark_active(self) -> None:
        if self.status != self.Status.CONFIRMED:
            raise BookingStateError(f"Only confirmed bookings can start, {self.booking_code} is {self.status}")
        self.status = self.Status.ACTIVE
        self.save(update_fields=["status", "updated_at"])

    def mark_completed(self) -> None:
        if self.status not in self.OCCUPYING_STATUSES:
            raise BookingStateError(f"Booking {self.booking_code} cannot complete from {self.status}")
        self.status = self.Status.COMPLETED
        self.save(update_fields=["status", "updated_at"])
