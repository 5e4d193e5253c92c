"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


def clean_phone(value: str) -> str:
    """Normalize a phone number and check it against the international format."""
    if not value:
        return value
    phone = User.objects.normalize_phone(value)
    PHONE_VALIDATOR(phone)
    return phone


class UserShortSerializer(serializers.ModelSerializer):
    """Participant summary embedded in bookings, conversations and properties."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]


class SessionUserSerializer(serializers.ModelSerializer):
    """User payload returned by the sign-in endpoints."""

    class Meta:
        model = User
        fields = ["id", "email", "role", "name"]


class UserSerializer(serializers.ModelSerializer):
    """Full profile of the current user."""

    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "verification_status",
            "verification_documents",
            "is_email_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "verification_status",
            "verification_documents",
            "is_email_verified",
            "created_at",
            "updated_at",
        ]

    def validate_phone(self, value: str) -> str:
        return clean_phone(value)
