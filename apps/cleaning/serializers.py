"""Serializers for cleaning tasks."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import CleaningTask


class CleaningTaskSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(source="uid", read_only=True)
    property_id = serializers.ReadOnlyField(source="property.id")
    booking_id = serializers.UUIDField(source="booking_uid", read_only=True)

    class Meta:
        model = CleaningTask
        fields = [
            "id",
            "property_id",
            "booking_id",
            "guest_name",
            "checkout_date",
            "status",
            "cost",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CleaningStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CleaningTask.Status.choices)
