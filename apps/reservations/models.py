"""Reservation models.

One row per calendar interval of a property: a guest stay or a
maintenance block. Rows are written only through
``DjangoIntervalRepository``, which replaces a property's whole set at
once after the domain store has accepted the change.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Reservation(models.Model):
    """Stored interval of a property's calendar."""

    class Kind(models.TextChoices):
        GUEST = "guest", _("Guest stay")
        MAINTENANCE = "maintenance", _("Maintenance")

    class DepositStatus(models.TextChoices):
        NONE = "none", _("No deposit")
        COLLECTED = "collected", _("Collected")
        RETURNED = "returned", _("Returned")

    uid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    kind = models.CharField(max_length=20, choices=Kind.choices, default=Kind.GUEST)
    check_in = models.DateField()
    check_out = models.DateField()
    guest_name = models.CharField(max_length=255)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    security_deposit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    maintenance_expense = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    deposit_status = models.CharField(
        max_length=20,
        choices=DepositStatus.choices,
        default=DepositStatus.NONE,
    )
    auto_cleaning = models.BooleanField(default=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField()

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["check_in"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "check_in", "check_out"], name="reservation_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.guest_name} {self.check_in}..{self.check_out}"

    def to_record(self) -> dict:
        """Raw interval record as the domain store loads it."""
        return {
            "id": str(self.uid),
            "type": self.kind,
            "checkIn": self.check_in.isoformat(),
            "checkOut": self.check_out.isoformat(),
            "guestName": self.guest_name,
            "totalPrice": str(self.total_price),
            "securityDeposit": str(self.security_deposit),
            "maintenanceExpense": str(self.maintenance_expense),
            "depositStatus": self.deposit_status,
            "autoCleaning": self.auto_cleaning,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat(),
        }
