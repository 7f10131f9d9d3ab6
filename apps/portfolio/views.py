"""Portfolio timeline API."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import permissions, serializers, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.properties.views import owned_properties
from apps.reservations.repository import build_portfolio_snapshots
from shared.domain.value_objects import Month

from .domain.timeline import PortfolioTimeline, PortfolioTimelineAggregator, parse_categories


class TimelineQuerySerializer(serializers.Serializer):
    month = serializers.CharField(required=False)
    categories = serializers.CharField(required=False, allow_blank=True)

    def validate_month(self, value):  # type: ignore
        try:
            return Month.parse(value)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc))

    def validate_categories(self, value):  # type: ignore
        names = [name for name in value.split(",") if name.strip()]
        try:
            return parse_categories(names)
        except ValueError:
            raise serializers.ValidationError(f"Unknown category in {value!r}.")


class PortfolioTimelineView(APIView):
    """One row per property, one cell per day of the month."""

    permission_classes = [permissions.IsAuthenticated]
    aggregator = PortfolioTimelineAggregator()

    def get(self, request):  # type: ignore
        query = TimelineQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        month = query.validated_data.get("month") or Month.of(timezone.localdate())
        categories = query.validated_data.get("categories")
        if categories is None:
            categories = parse_categories(settings.PORTFOLIO_DEFAULT_CATEGORIES)

        snapshots = build_portfolio_snapshots(owned_properties(request.user))
        timeline = self.aggregator.build(snapshots, month, categories)
        return Response(self.render(timeline), status=status.HTTP_200_OK)

    @staticmethod
    def render(timeline: PortfolioTimeline) -> dict:
        return {
            "month": str(timeline.month),
            "categories": [category.value for category in timeline.categories],
            "days": [day.isoformat() for day in timeline.days],
            "rows": [
                {
                    "property_id": row.property.id,
                    "name": row.property.name,
                    "property_type": row.property.property_type,
                    "cells": [cell.event.to_dict() if cell.event else None for cell in row.cells],
                }
                for row in timeline.rows
            ],
            "events": [event.to_dict() for event in timeline.events],
        }
