"""Serializers for the properties API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Installment, Lease, Property


class LeaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lease
        fields = ["id", "tenant_name", "start_date", "end_date", "monthly_rent"]

    def validate(self, attrs):  # type: ignore
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError("Lease end date cannot be before its start date.")
        return attrs


class InstallmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Installment
        fields = ["id", "amount", "due_date", "status", "paid_at"]


class PropertySerializer(serializers.ModelSerializer):
    """Property with its leases and installment schedule."""

    owner_id = serializers.ReadOnlyField(source="owner.id")
    leases = LeaseSerializer(many=True, read_only=True)
    installments = InstallmentSerializer(many=True, read_only=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "owner_id",
            "name",
            "property_type",
            "address_line",
            "currency",
            "cleaning_fee",
            "calendar_version",
            "leases",
            "installments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "calendar_version", "created_at", "updated_at"]
