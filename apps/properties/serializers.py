"""Serializers for the properties domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Property
from .services import is_valid_type_for_category


class PropertyShortSerializer(serializers.ModelSerializer):
    """Compact listing card embedded in bookings, bookmarks and conversations."""

    class Meta:
        model = Property
        fields = ["id", "title", "images"]


class PropertySerializer(serializers.ModelSerializer):
    owner = UserShortSerializer(read_only=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "owner",
            "title",
            "description",
            "property_type",
            "category",
            "status",
            "price",
            "address",
            "city",
            "state",
            "country",
            "bedrooms",
            "bathrooms",
            "area",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)

    class Meta:
        model = Property
        fields = [
            "title",
            "description",
            "property_type",
            "category",
            "status",
            "price",
            "address",
            "city",
            "state",
            "country",
            "bedrooms",
            "bathrooms",
            "area",
            "images",
        ]

    def validate(self, attrs):  # type: ignore
        category = attrs.get("category", getattr(self.instance, "category", None))
        property_type = attrs.get("property_type", getattr(self.instance, "property_type", None))
        if category and property_type and not is_valid_type_for_category(property_type, category):
            raise serializers.ValidationError(
                {"property_type": f"'{property_type}' cannot be listed for {category}."}
            )
        return attrs

    def create(self, validated_data):  # type: ignore
        validated_data["owner"] = self.context["request"].user
        return super().create(validated_data)

    def to_representation(self, instance):  # type: ignore
        return PropertySerializer(instance, context=self.context).data


class PropertyStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Property.Status.choices)


class MyPropertySerializer(serializers.ModelSerializer):
    class Meta:
        model = Property
        fields = [
            "id",
            "title",
            "property_type",
            "category",
            "status",
            "price",
            "city",
            "images",
            "created_at",
        ]
