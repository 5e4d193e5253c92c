"""API views for analytics.

Provides the dashboard overview: owners see their listings, the bookings
made on them and the revenue they earned; customers see their own
bookings and bookmarks. Both get the average rating they received.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.bookmarks.models import Bookmark
from apps.finances.models import Revenue
from apps.properties.models import Property
from apps.ratings.services import rating_summary


def _counts_by(queryset, field: str, choices) -> dict[str, int]:
    """Count rows per choice value, including zeroes for absent values."""
    counts = {value: 0 for value in choices.values}
    for row in queryset.values(field).annotate(total=models.Count("id")):
        counts[row[field]] = row["total"]
    return counts


class OverviewAnalyticsView(APIView):
    """Return dashboard statistics for the current user."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        user = request.user
        if user.is_owner():
            data = self._owner_overview(user)
        else:
            data = self._customer_overview(user)
        data["rating"] = rating_summary(user.id)
        return Response(data)

    def _owner_overview(self, user) -> dict:
        properties = Property.objects.filter(owner=user)
        bookings = Booking.objects.filter(owner=user)
        revenue = Revenue.objects.filter(owner=user).aggregate(total=models.Sum("amount"))["total"]
        return {
            "role": user.role,
            "properties": {
                "total": properties.count(),
                "by_status": _counts_by(properties, "status", Property.Status),
            },
            "bookings": {
                "total": bookings.count(),
                "by_status": _counts_by(bookings, "status", Booking.Status),
            },
            "revenue": revenue or Decimal("0"),
        }

    def _customer_overview(self, user) -> dict:
        bookings = Booking.objects.filter(customer=user)
        return {
            "role": user.role,
            "bookings": {
                "total": bookings.count(),
                "by_status": _counts_by(bookings, "status", Booking.Status),
            },
            "bookmarks": Bookmark.objects.filter(user=user).count(),
        }
