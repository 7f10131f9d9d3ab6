"""Admin registration for reservations.

Rows are read-only here: calendar writes must go through the
IntervalStore so the no-overlap rule is enforced.
"""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("guest_name", "property", "kind", "check_in", "check_out", "total_price", "deposit_status")
    list_filter = ("kind", "deposit_status", "check_in")
    search_fields = ("guest_name", "property__name", "notes")

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False
