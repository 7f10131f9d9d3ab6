"""API views for cleaning tasks."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.properties.views import PropertyCalendarMixin
from shared.infrastructure.http import result_response

from .application.handlers import delete_cleaning_task, list_cleaning_tasks, update_cleaning_status
from .serializers import CleaningStatusSerializer, CleaningTaskSerializer


class CleaningTaskViewSet(PropertyCalendarMixin, viewsets.ViewSet):
    """Cleaning tasks of one property; editable independently of the bookings."""

    lookup_field = "task_id"

    def list(self, request, property_id=None):  # type: ignore
        tasks = list_cleaning_tasks(self.get_property().pk).select_related("property")
        return Response(CleaningTaskSerializer(tasks, many=True).data)

    def partial_update(self, request, property_id=None, task_id=None):  # type: ignore
        serializer = CleaningStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = update_cleaning_status(self.get_property().pk, task_id, serializer.validated_data["status"])
        return result_response(result, lambda task: CleaningTaskSerializer(task).data)

    def destroy(self, request, property_id=None, task_id=None):  # type: ignore
        return result_response(delete_cleaning_task(self.get_property().pk, task_id))
