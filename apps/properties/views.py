"""Property API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore

from .models import Installment, Lease, Property
from .serializers import InstallmentSerializer, LeaseSerializer, PropertySerializer


def _is_admin(user) -> bool:
    return getattr(user, "is_staff", False) or getattr(user, "is_superuser", False)


class IsPropertyOwnerOrAdmin(permissions.BasePermission):
    """Only the owner and staff may see or change a property and its calendar."""

    def has_permission(self, request, view):  # type: ignore
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):  # type: ignore
        user = request.user
        if _is_admin(user):
            return True
        # Leases and installments belong to the owner of their property
        prop = obj if isinstance(obj, Property) else obj.property
        return prop.owner_id == user.id


def owned_properties(user):
    qs = Property.objects.select_related("owner")
    if _is_admin(user):
        return qs
    return qs.filter(owner=user)


class PropertyViewSet(viewsets.ModelViewSet):
    """Viewset for the owner's properties."""

    serializer_class = PropertySerializer
    permission_classes = [permissions.IsAuthenticated, IsPropertyOwnerOrAdmin]

    def get_queryset(self):  # type: ignore
        return owned_properties(self.request.user).prefetch_related("leases", "installments")

    def perform_create(self, serializer):  # type: ignore
        serializer.save(owner=self.request.user)


class PropertyCalendarMixin:
    """Resolves ``property_id`` from the URL and checks the caller may use it."""

    property_lookup_url_kwarg = "property_id"
    permission_classes = [permissions.IsAuthenticated, IsPropertyOwnerOrAdmin]

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        property_id = kwargs.get(self.property_lookup_url_kwarg)
        self.property_object = get_object_or_404(Property, pk=property_id)
        self.check_object_permissions(request, self.property_object)

    def get_property(self) -> Property:
        return self.property_object

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        context["property"] = getattr(self, "property_object", None)
        return context


class LeaseViewSet(PropertyCalendarMixin, viewsets.ModelViewSet):
    serializer_class = LeaseSerializer

    def get_queryset(self):  # type: ignore
        return Lease.objects.filter(property=self.get_property())

    def perform_create(self, serializer):  # type: ignore
        serializer.save(property=self.get_property())


class InstallmentViewSet(PropertyCalendarMixin, viewsets.ModelViewSet):
    serializer_class = InstallmentSerializer

    def get_queryset(self):  # type: ignore
        return Installment.objects.filter(property=self.get_property())

    def perform_create(self, serializer):  # type: ignore
        serializer.save(property=self.get_property())
