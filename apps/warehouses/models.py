"""Warehouse and pricing models for the storage marketplace."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.entities import BillingUnit, PricingSchedule as DomainPricingSchedule, ResourceType


def default_currency() -> str:
    return getattr(settings, "BOOKING_CURRENCY", "USD")


class Warehouse(models.Model):
    """Storage facility selling pallet slots and/or floor area."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    total_pallet_slots = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Pallet capacity. Empty when the warehouse has no pallet storage."),
    )
    total_area_sqft = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Rentable floor area in square feet."),
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Warehouse")
        verbose_name_plural = _("Warehouses")
        ordering = ["name"]
        indexes = [models.Index(fields=["city", "status"], name="warehouse_city_status_idx")]

    def __str__(self) -> str:
        return self.name

    def capacity_for(self, resource_type) -> Decimal | None:
        resource_type = ResourceType.parse(resource_type)
        if resource_type is ResourceType.PALLET:
            value = self.total_pallet_slots
        else:
            value = self.total_area_sqft
        return None if value is None else Decimal(value)


class PricingSchedule(models.Model):
    """
    Pricing for one resource type at one warehouse.

    The row is also the lock target that serializes admissions for its
    (warehouse, resource type) pair.
    """

    class ResourceTypeChoices(models.TextChoices):
        PALLET = ResourceType.PALLET.value, _("Pallet slots")
        AREA = ResourceType.AREA.value, _("Floor area")

    class BillingUnitChoices(models.TextChoices):
        PER_UNIT_PER_DAY = BillingUnit.PER_UNIT_PER_DAY.value, _("Per unit per day")
        PER_UNIT_PER_WEEK = BillingUnit.PER_UNIT_PER_WEEK.value, _("Per unit per week")
        PER_UNIT_PER_MONTH = BillingUnit.PER_UNIT_PER_MONTH.value, _("Per unit per month")
        PER_UNIT_PER_YEAR = BillingUnit.PER_UNIT_PER_YEAR.value, _("Per unit per year")

    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.CASCADE,
        related_name="pricing_schedules",
    )
    resource_type = models.CharField(max_length=16, choices=ResourceTypeChoices.choices)
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        validators=[MinValueValidator(Decimal("0"))],
    )
    billing_unit = models.CharField(max_length=32, choices=BillingUnitChoices.choices)
    min_quantity = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_quantity = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    volume_discounts = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Threshold to percent, e.g. {"50": 10, "100": 15}.'),
    )
    currency = models.CharField(max_length=3, default=default_currency)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Pricing schedule")
        verbose_name_plural = _("Pricing schedules")
        ordering = ["warehouse", "resource_type"]
        constraints = [
            models.UniqueConstraint(
                fields=["warehouse", "resource_type"],
                name="unique_schedule_per_resource",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(min_quantity__isnull=True)
                    | models.Q(max_quantity__isnull=True)
                    | models.Q(min_quantity__lte=models.F("max_quantity"))
                ),
                name="schedule_min_not_above_max",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.warehouse} / {self.resource_type} @ {self.base_price} {self.billing_unit}"

    def to_domain(self) -> DomainPricingSchedule:
        return DomainPricingSchedule.from_mapping(
            resource_type=self.resource_type,
            base_price=self.base_price,
            billing_unit=self.billing_unit,
            volume_discounts=self.volume_discounts,
            min_quantity=self.min_quantity,
            max_quantity=self.max_quantity,
            currency=self.currency,
        )
