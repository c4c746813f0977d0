from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


BILLING_UNIT_CHOICES = [
    ("per_unit_per_day", "Per unit per day"),
    ("per_unit_per_week", "Per unit per week"),
    ("per_unit_per_month", "Per unit per month"),
    ("per_unit_per_year", "Per unit per year"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("warehouses", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_code", models.CharField(editable=False, max_length=12, unique=True)),
                (
                    "resource_type",
                    models.CharField(choices=[("pallet", "Pallet slots"), ("area", "Floor area")], max_length=16),
                ),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Pallet count or square footage, matching the resource type.",
                        max_digits=12,
                    ),
                ),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(help_text="Exclusive: storage ends the day before.")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Requested, awaiting admission"),
                            ("confirmed", "Admitted"),
                            ("active", "In storage"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("unit_price", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=12)),
                ("billing_unit", models.CharField(blank=True, choices=BILLING_UNIT_CHOICES, max_length=32)),
                (
                    "period_count",
                    models.DecimalField(
                        decimal_places=6,
                        default=Decimal("0"),
                        help_text="Billing periods; yearly schedules store the day fraction to 6 places.",
                        max_digits=12,
                    ),
                ),
                ("base_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                (
                    "volume_discount_percent",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5),
                ),
                (
                    "volume_discount_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                (
                    "membership_discount_percent",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5),
                ),
                (
                    "membership_discount_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                (
                    "cancellation_source",
                    models.CharField(
                        blank=True,
                        choices=[("customer", "Customer"), ("staff", "Warehouse staff"), ("system", "System")],
                        max_length=16,
                    ),
                ),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="storage_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="warehouses.warehouse",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["warehouse", "resource_type", "start_date", "end_date"],
                        name="booking_occupancy_idx",
                    ),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="storage_booking_valid_dates",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)),
                        name="storage_booking_positive_quantity",
                    ),
                ],
            },
        ),
    ]
