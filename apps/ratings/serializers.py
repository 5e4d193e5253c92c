"""Serializers for ratings."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Rating


class RatingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Rating
        fields = ['id', 'booking', 'rater', 'rated', 'rating', 'comment', 'created_at']
        read_only_fields = fields


class RatingDetailSerializer(RatingSerializer):
    rater = UserShortSerializer(read_only=True)


class RatingCreateSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    rated_id = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default='')
