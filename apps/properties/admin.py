"""Admin registration for properties."""

from __future__ import annotations

from django.contrib import admin

from .models import Installment, Lease, Property


class LeaseInline(admin.TabularInline):
    model = Lease
    extra = 0


class InstallmentInline(admin.TabularInline):
    model = Installment
    extra = 0


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "property_type", "owner", "cleaning_fee", "calendar_version", "created_at")
    list_filter = ("property_type",)
    search_fields = ("name", "address_line", "owner__email")
    readonly_fields = ("calendar_version", "created_at", "updated_at")
    inlines = [LeaseInline, InstallmentInline]
