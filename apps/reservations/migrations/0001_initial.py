import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                (
                    "kind",
                    models.CharField(
                        choices=[("guest", "Guest stay"), ("maintenance", "Maintenance")],
                        default="guest",
                        max_length=20,
                    ),
                ),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("guest_name", models.CharField(max_length=255)),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("security_deposit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("maintenance_expense", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "deposit_status",
                    models.CharField(
                        choices=[("none", "No deposit"), ("collected", "Collected"), ("returned", "Returned")],
                        default="none",
                        max_length=20,
                    ),
                ),
                ("auto_cleaning", models.BooleanField(default=True)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField()),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Reservation",
                "verbose_name_plural": "Reservations",
                "ordering": ["check_in"],
                "indexes": [
                    models.Index(fields=["property", "check_in", "check_out"], name="reservation_dates_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out__gt", models.F("check_in"))),
                        name="reservation_valid_dates",
                    )
                ],
            },
        ),
    ]
