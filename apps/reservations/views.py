"""API views for property calendars."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore
import structlog

from apps.properties.views import PropertyCalendarMixin
from shared.application.message_bus import message_bus
from shared.domain.value_objects import Month
from shared.infrastructure.http import error_response, result_response

from .application.command_handlers import (
    CreateIntervalCommand,
    RemoveIntervalCommand,
    UpdateIntervalCommand,
)
from .domain.calendar import AvailabilityCalendar
from .domain.entities import IntervalDraft
from .domain.metrics import month_occupancy, pending_deposits
from .domain.store import IntervalStore
from .repository import DjangoIntervalRepository
from .serializers import CalendarQuerySerializer, IntervalSerializer, IntervalWriteSerializer

logger = structlog.get_logger(__name__)


class StoreMixin(PropertyCalendarMixin):
    repository_class = DjangoIntervalRepository

    def load_store(self):
        property_id = self.get_property().pk
        return IntervalStore.load(property_id, self.repository_class().load_intervals(property_id))


class PropertyCalendarView(StoreMixin, APIView):
    """Month grid of day statuses plus the month's occupancy figures."""

    def get(self, request, property_id):  # type: ignore
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        today = timezone.localdate()
        try:
            month = Month.parse(query.validated_data["month"]) if "month" in query.validated_data else Month.of(today)
            previous, following = month.previous(), month.next()
        except ValueError as exc:
            return Response({"month": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)

        loaded = self.load_store()
        if not loaded.ok:
            logger.error("calendar.load_failed", property_id=property_id, error=str(loaded.error))
            return error_response(loaded.error)
        intervals = loaded.value.list()

        calendar = AvailabilityCalendar(
            intervals,
            today=today,
            month=month,
            editing_id=query.validated_data.get("editing"),
        )
        return Response({
            "property_id": self.get_property().pk,
            "month": str(month),
            "previous": str(previous),
            "next": str(following),
            "version": self.get_property().calendar_version,
            "days": [day.to_dict() for day in calendar.month_days()],
            "occupancy": month_occupancy(intervals, month).to_dict(),
            "pending_deposits": IntervalSerializer(pending_deposits(intervals), many=True).data,
        })


class IntervalViewSet(StoreMixin, viewsets.ViewSet):
    """Guest stays and maintenance blocks of one property."""

    lookup_field = "interval_id"

    def list(self, request, property_id=None):  # type: ignore
        loaded = self.load_store()
        return result_response(loaded, lambda store: IntervalSerializer(store.list(), many=True).data)

    def retrieve(self, request, property_id=None, interval_id=None):  # type: ignore
        loaded = self.load_store()
        if not loaded.ok:
            return error_response(loaded.error)
        return result_response(loaded.value.get(interval_id), _serialize)

    def create(self, request, property_id=None):  # type: ignore
        serializer = IntervalWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        draft = IntervalDraft(**serializer.validated_data)

        result = message_bus.handle_command(CreateIntervalCommand(property_id=self.get_property().pk, draft=draft))
        if result.ok:
            logger.info("interval.created", property_id=property_id, interval_id=str(result.value.id))
        return result_response(result, _serialize, success_status=status.HTTP_201_CREATED)

    def partial_update(self, request, property_id=None, interval_id=None):  # type: ignore
        serializer = IntervalWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = message_bus.handle_command(UpdateIntervalCommand(
            property_id=self.get_property().pk,
            interval_id=interval_id,
            patch=dict(serializer.validated_data),
        ))
        return result_response(result, _serialize)

    def destroy(self, request, property_id=None, interval_id=None):  # type: ignore
        result = message_bus.handle_command(RemoveIntervalCommand(
            property_id=self.get_property().pk,
            interval_id=interval_id,
        ))
        return result_response(result)


def _serialize(interval):
    return IntervalSerializer(interval).data
