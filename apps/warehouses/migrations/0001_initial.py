from decimal import Decimal

import apps.warehouses.models
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Warehouse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("address", models.CharField(blank=True, max_length=255)),
                (
                    "total_pallet_slots",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Pallet capacity. Empty when the warehouse has no pallet storage.",
                        null=True,
                    ),
                ),
                (
                    "total_area_sqft",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Rentable floor area in square feet.",
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Warehouse",
                "verbose_name_plural": "Warehouses",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["city", "status"], name="warehouse_city_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="PricingSchedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "resource_type",
                    models.CharField(choices=[("pallet", "Pallet slots"), ("area", "Floor area")], max_length=16),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=4,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "billing_unit",
                    models.CharField(
                        choices=[
                            ("per_unit_per_day", "Per unit per day"),
                            ("per_unit_per_week", "Per unit per week"),
                            ("per_unit_per_month", "Per unit per month"),
                            ("per_unit_per_year", "Per unit per year"),
                        ],
                        max_length=32,
                    ),
                ),
                ("min_quantity", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("max_quantity", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                (
                    "volume_discounts",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='Threshold to percent, e.g. {"50": 10, "100": 15}.',
                    ),
                ),
                ("currency", models.CharField(default=apps.warehouses.models.default_currency, max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "warehouse",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pricing_schedules",
                        to="warehouses.warehouse",
                    ),
                ),
            ],
            options={
                "verbose_name": "Pricing schedule",
                "verbose_name_plural": "Pricing schedules",
                "ordering": ["warehouse", "resource_type"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("warehouse", "resource_type"),
                        name="unique_schedule_per_resource",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("min_quantity__isnull", True),
                            ("max_quantity__isnull", True),
                            ("min_quantity__lte", models.F("max_quantity")),
                            _connector="OR",
                        ),
                        name="schedule_min_not_above_max",
                    ),
                ],
            },
        ),
    ]
