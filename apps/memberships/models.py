"""Membership tiers and customer enrolment."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class MembershipTier(models.Model):
    """Customer tier (bronze, silver, ...) with its storage discount."""

    name = models.CharField(max_length=50, unique=True)
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    min_spend = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Membership tier")
        verbose_name_plural = _("Membership tiers")
        ordering = ["min_spend"]

    def __str__(self) -> str:
        return f"{self.name} ({self.discount_percent}%)"


class CustomerMembership(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="membership",
    )
    tier = models.ForeignKey(MembershipTier, on_delete=models.PROTECT, related_name="members")
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Customer membership")
        verbose_name_plural = _("Customer memberships")

    def __str__(self) -> str:
        return f"{self.user} - {self.tier.name}"

    @property
    def discount_percent(self) -> Decimal:
        return self.tier.discount_percent if self.tier.is_active else Decimal("0")
