"""Serializers for the booking domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertyShortSerializer
from apps.ratings.serializers import RatingSerializer
from apps.users.serializers import UserShortSerializer

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request sent by a customer."""

    property_id = serializers.IntegerField()
    booking_type = serializers.ChoiceField(choices=Booking.BookingType.choices)
    meeting_date = serializers.DateTimeField(required=False, allow_null=True)
    meeting_location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    meeting_notes = serializers.CharField(required=False, allow_blank=True)


class PaymentSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    payment_method = serializers.CharField(max_length=50)


class CancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")


class BookingSerializer(serializers.ModelSerializer):
    property = PropertyShortSerializer(read_only=True)
    customer = UserShortSerializer(read_only=True)
    owner = UserShortSerializer(read_only=True)
    ratings = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "customer",
            "owner",
            "booking_type",
            "status",
            "payment_status",
            "payment_amount",
            "payment_method",
            "payment_intent_id",
            "payment_date",
            "meeting_date",
            "meeting_location",
            "meeting_notes",
            "completed_at",
            "cancelled_at",
            "cancellation_reason",
            "ratings",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_ratings(self, obj: Booking) -> list[dict]:
        """Ratings the requesting user left on this booking."""
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return []
        own = [rating for rating in obj.ratings.all() if rating.rater_id == request.user.id]
        return RatingSerializer(own, many=True).data
