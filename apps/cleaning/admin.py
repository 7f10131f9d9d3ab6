"""Admin registration for cleaning tasks."""

from __future__ import annotations

from django.contrib import admin

from .models import CleaningTask


@admin.register(CleaningTask)
class CleaningTaskAdmin(admin.ModelAdmin):
    list_display = ("checkout_date", "property", "guest_name", "status", "cost")
    list_filter = ("status", "checkout_date")
    search_fields = ("guest_name", "property__name")
    readonly_fields = ("uid", "booking_uid", "created_at", "updated_at")
