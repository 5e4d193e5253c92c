"""Admin registration for revenue records."""

from __future__ import annotations

from django.contrib import admin

from .models import Revenue


@admin.register(Revenue)
class RevenueAdmin(admin.ModelAdmin):
    list_display = ("owner", "property", "revenue_type", "amount", "created_at")
    list_filter = ("revenue_type", "created_at")
    search_fields = ("owner__email", "property__title", "description")
    readonly_fields = ("created_at",)
