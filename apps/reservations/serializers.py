"""Serializers for the reservations API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Reservation

MONEY = {"max_digits": 12, "decimal_places": 2, "required": False, "allow_null": True}


class IntervalWriteSerializer(serializers.Serializer):
    """Create or patch a guest stay / maintenance block.

    Only parses the request body. Business rules (dates in order, guest
    name present, no overlap) are checked by the IntervalStore so the
    API and every other caller share one set of rules.
    """

    kind = serializers.ChoiceField(choices=Reservation.Kind.choices, required=False)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guest_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    total_price = serializers.DecimalField(**MONEY)
    security_deposit = serializers.DecimalField(**MONEY)
    maintenance_expense = serializers.DecimalField(**MONEY)
    deposit_status = serializers.ChoiceField(
        choices=Reservation.DepositStatus.choices,
        required=False,
        allow_null=True,
    )
    auto_cleaning = serializers.BooleanField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class IntervalSerializer(serializers.Serializer):
    """Read-only view of a domain Interval."""

    id = serializers.UUIDField()
    kind = serializers.CharField(source="kind.value")
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    nights = serializers.IntegerField()
    guest_name = serializers.CharField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    security_deposit = serializers.DecimalField(max_digits=12, decimal_places=2)
    maintenance_expense = serializers.DecimalField(max_digits=12, decimal_places=2)
    deposit_status = serializers.CharField(source="deposit_status.value")
    auto_cleaning = serializers.BooleanField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()


class CalendarQuerySerializer(serializers.Serializer):
    month = serializers.RegexField(r"^\d{4}-\d{2}$", required=False)
    editing = serializers.UUIDField(required=False)
