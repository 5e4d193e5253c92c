"""Serializers for the bookmarks domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.models import Property

from .models import Bookmark


class BookmarkedPropertySerializer(serializers.ModelSerializer):
    """Short property card shown in the bookmarks list."""

    class Meta:
        model = Property
        fields = [
            'id',
            'title',
            'property_type',
            'category',
            'status',
            'price',
            'city',
            'images',
        ]


class BookmarkSerializer(serializers.ModelSerializer):
    property = BookmarkedPropertySerializer(read_only=True)

    class Meta:
        model = Bookmark
        fields = ['id', 'property_id', 'property', 'created_at']
        read_only_fields = fields
