"""Serializers for the finance domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Revenue


class RevenueSerializer(serializers.ModelSerializer):
    property_title = serializers.ReadOnlyField(source="property.title")

    class Meta:
        model = Revenue
        fields = [
            "id",
            "property",
            "property_title",
            "booking",
            "amount",
            "revenue_type",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class EarningsQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=["monthly", "weekly"], default="monthly")
