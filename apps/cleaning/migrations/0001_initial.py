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
            name="CleaningTask",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                (
                    "booking_uid",
                    models.UUIDField(
                        blank=True,
                        help_text="Reservation that requested the cleaning. Not a foreign key: the task outlives it.",
                        null=True,
                    ),
                ),
                ("guest_name", models.CharField(blank=True, max_length=255)),
                ("checkout_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("scheduled", "Scheduled"),
                            ("completed", "Completed"),
                            ("missed", "Missed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cleaning_tasks",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Cleaning task",
                "verbose_name_plural": "Cleaning tasks",
                "ordering": ["checkout_date"],
                "indexes": [
                    models.Index(fields=["property", "checkout_date"], name="cleaning_property_date_idx"),
                    models.Index(fields=["status"], name="cleaning_status_idx"),
                ],
            },
        ),
    ]
