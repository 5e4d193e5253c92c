"""Serializers for authentication flows (OTP request, OTP verification, signup)."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .serializers import clean_phone
from .services import issue_otp

logger = logging.getLogger(__name__)

User = get_user_model()


class EmailNormalizingMixin:
    def validate_email(self, value: str) -> str:
        return value.strip().lower()


class SendOTPSerializer(EmailNormalizingMixin, serializers.Serializer):
    email = serializers.EmailField()

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        return issue_otp(validated_data["email"])


class VerifyOTPSerializer(EmailNormalizingMixin, serializers.Serializer):
    email = serializers.EmailField()
    code = serializers.CharField(
        min_length=settings.OTP_LENGTH,
        max_length=settings.OTP_LENGTH,
        error_messages={
            "min_length": "OTP must be 6 digits",
            "max_length": "OTP must be 6 digits",
        },
    )


class SignupSerializer(EmailNormalizingMixin, serializers.Serializer):
    """Completes the profile of a user who has just verified their email."""

    email = serializers.EmailField()
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    role = serializers.ChoiceField(
        choices=User.RoleChoices.choices, default=User.RoleChoices.CUSTOMER
    )
    documents = serializers.ListField(
        child=serializers.CharField(max_length=500), required=False
    )

    def validate_phone(self, value: str) -> str:
        return clean_phone(value)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = self.context["request"].user
        if user.email.lower() != attrs["email"]:
            raise serializers.ValidationError({"email": "Email mismatch"})
        return attrs

    @transaction.atomic
    def update(self, instance, validated_data: dict[str, Any]):  # type: ignore
        instance.name = validated_data.get("name") or instance.name
        phone = validated_data.get("phone")
        if phone:
            instance.phone = phone
        instance.role = validated_data.get("role") or instance.role
        documents = validated_data.get("documents")
        if documents is not None:
            instance.verification_documents = documents
        if instance.role == User.RoleChoices.OWNER:
            instance.verification_status = User.VerificationStatus.PENDING
        instance.save(
            update_fields=[
                "name",
                "phone",
                "role",
                "verification_documents",
                "verification_status",
                "updated_at",
            ]
        )
        logger.info(f"Account updated for user {instance.id} (role={instance.role})")
        return instance
