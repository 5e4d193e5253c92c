"""API views for bookmarks."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.properties.models import Property

from .models import Bookmark
from .serializers import BookmarkSerializer

logger = logging.getLogger(__name__)


class BookmarkViewSet(viewsets.GenericViewSet):
    """
    Viewset to list, check and toggle bookmarked properties.

    Endpoints:
    - GET /api/v1/bookmarks/ - the caller's bookmarks
    - GET /api/v1/bookmarks/{property_id}/ - is the property bookmarked
    - POST /api/v1/bookmarks/{property_id}/toggle/ - add or remove
    """

    serializer_class = BookmarkSerializer
    lookup_field = 'property_id'
    lookup_value_regex = '[0-9]+'

    def get_permissions(self):  # type: ignore
        if self.action == 'retrieve':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):  # type: ignore
        return Bookmark.objects.select_related('property').filter(user=self.request.user)

    def list(self, request):  # type: ignore
        return Response({'bookmarks': self.get_serializer(self.get_queryset(), many=True).data})

    def retrieve(self, request, property_id=None):  # type: ignore
        """Anonymous visitors simply see nothing bookmarked."""
        if not request.user.is_authenticated:
            return Response({'is_bookmarked': False})
        exists = Bookmark.objects.filter(user=request.user, property_id=property_id).exists()
        return Response({'is_bookmarked': exists})

    @action(detail=True, methods=['post'])
    def toggle(self, request, property_id=None):  # type: ignore
        property_obj = get_object_or_404(Property, pk=property_id)
        deleted, _ = Bookmark.objects.filter(user=request.user, property=property_obj).delete()
        if deleted:
            return Response(
                {'message': 'Bookmark removed', 'is_bookmarked': False},
                status=status.HTTP_200_OK,
            )

        try:
            with transaction.atomic():
                Bookmark.objects.create(user=request.user, property=property_obj)
        except IntegrityError:
            logger.info(f"Concurrent bookmark of property {property_obj.id} by user {request.user.id}")
        return Response(
            {'message': 'Bookmark added', 'is_bookmarked': True},
            status=status.HTTP_201_CREATED,
        )
