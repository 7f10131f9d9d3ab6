"""Cleaning task models."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CleaningTask(models.Model):
    """Turnover cleaning scheduled on a guest's checkout day."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SCHEDULED = "scheduled", _("Scheduled")
        COMPLETED = "completed", _("Completed")
        MISSED = "missed", _("Missed")

    uid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="cleaning_tasks",
    )
    booking_uid = models.UUIDField(
        null=True,
        blank=True,
        help_text=_("Reservation that requested the cleaning. Not a foreign key: the task outlives it."),
    )
    guest_name = models.CharField(max_length=255, blank=True)
    checkout_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    cost = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Cleaning task")
        verbose_name_plural = _("Cleaning tasks")
        ordering = ["checkout_date"]
        indexes = [
            models.Index(fields=["property", "checkout_date"], name="cleaning_property_date_idx"),
            models.Index(fields=["status"], name="cleaning_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Cleaning {self.checkout_date} ({self.status})"
