"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "city",
        "category",
        "property_type",
        "status",
        "price",
        "owner",
    )
    list_filter = ("category", "property_type", "status", "city")
    search_fields = ("title", "city", "address", "owner__email")
    readonly_fields = ("created_at", "updated_at")
