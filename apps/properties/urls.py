"""URL routing for properties and their calendars."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from apps.cleaning.views import CleaningTaskViewSet
from apps.reservations.views import IntervalViewSet, PropertyCalendarView

from .views import InstallmentViewSet, LeaseViewSet, PropertyViewSet

router = SimpleRouter()
router.register(r"", PropertyViewSet, basename="property")

interval_list = IntervalViewSet.as_view({"get": "list", "post": "create"})
interval_detail = IntervalViewSet.as_view({"get": "retrieve", "patch": "partial_update", "delete": "destroy"})

cleaning_list = CleaningTaskViewSet.as_view({"get": "list"})
cleaning_detail = CleaningTaskViewSet.as_view({"patch": "partial_update", "delete": "destroy"})

lease_list = LeaseViewSet.as_view({"get": "list", "post": "create"})
lease_detail = LeaseViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)

installment_list = InstallmentViewSet.as_view({"get": "list", "post": "create"})
installment_detail = InstallmentViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)

urlpatterns = [
    # Calendar
    path("<int:property_id>/calendar/", PropertyCalendarView.as_view(), name="property-calendar"),
    path("<int:property_id>/intervals/", interval_list, name="property-interval-list"),
    path("<int:property_id>/intervals/<uuid:interval_id>/", interval_detail, name="property-interval-detail"),
    # Cleaning tasks
    path("<int:property_id>/cleanings/", cleaning_list, name="property-cleaning-list"),
    path("<int:property_id>/cleanings/<uuid:task_id>/", cleaning_detail, name="property-cleaning-detail"),
    # Leases and installments
    path("<int:property_id>/leases/", lease_list, name="property-lease-list"),
    path("<int:property_id>/leases/<int:pk>/", lease_detail, name="property-lease-detail"),
    path("<int:property_id>/installments/", installment_list, name="property-installment-list"),
    path("<int:property_id>/installments/<int:pk>/", installment_detail, name="property-installment-detail"),
    path("", include(router.urls)),
]
