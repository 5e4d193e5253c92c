"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "customer",
        "owner",
        "booking_type",
        "status",
        "payment_status",
        "payment_amount",
        "created_at",
    )
    list_filter = ("booking_type", "status", "payment_status")
    search_fields = ("property__title", "customer__email", "owner__email", "payment_intent_id")
    readonly_fields = (
        "payment_intent_id",
        "payment_date",
        "completed_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
