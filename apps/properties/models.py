"""Property models for the rental portfolio.

A property is anything the owner manages: short-term rentals, long-term
rentals, commercial units and construction projects. Short-term rentals
carry a reservation calendar; long-term and commercial ones carry leases;
construction projects carry an installment schedule.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """A managed property."""

    class PropertyType(models.TextChoices):
        STR = "str", _("Short-term rental")
        RENTAL = "rental", _("Long-term rental")
        COMMERCIAL = "commercial", _("Commercial")
        CONSTRUCTION = "construction", _("Construction")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    name = models.CharField(max_length=255)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.STR,
    )
    address_line = models.CharField(max_length=255, blank=True)
    currency = models.CharField(max_length=3, default="USD")
    cleaning_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Cost of a turnover cleaning, copied onto new cleaning tasks."),
    )
    calendar_version = models.PositiveIntegerField(
        default=0,
        help_text=_("Bumped on every reservation calendar write."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["property_type", "name"]
        indexes = [
            models.Index(fields=["owner", "property_type"], name="property_owner_type_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Lease(models.Model):
    """Tenant contract on a long-term or commercial property. Both ends are inclusive."""

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="leases")
    tenant_name = models.CharField(max_length=255, blank=True)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    monthly_rent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Lease")
        verbose_name_plural = _("Leases")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__isnull=True) | models.Q(end_date__gte=models.F("start_date")),
                name="lease_valid_dates",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.tenant_name or 'Tenant'} @ {self.property_id}"


class Installment(models.Model):
    """Scheduled payment of a construction project."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="installments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    paid_at = models.DateField(null=True, blank=True)

    class Meta:
        verbose_name = _("Installment")
        verbose_name_plural = _("Installments")
        ordering = ["due_date"]

    def __str__(self) -> str:
        return f"{self.amount} due {self.due_date}"
