"""Property API views."""

from __future__ import annotations

import logging

from django.http import Http404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import PropertyFilterSet
from .models import Property
from .serializers import (
    MyPropertySerializer,
    PropertySerializer,
    PropertyStatusSerializer,
    PropertyWriteSerializer,
)
from .services import split_by_category

logger = logging.getLogger(__name__)


class PropertyPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100


class IsPropertyOwner(permissions.BasePermission):
    """Anyone may read; only owners list new properties and edit their own."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(view, "action", None) == "create":
            return user.is_owner()
        return True

    def has_object_permission(self, request, view, obj: Property):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.owner_id == request.user.id


class PropertyViewSet(viewsets.ModelViewSet):
    """Viewset for browsing and managing property listings."""

    queryset = Property.objects.select_related("owner")
    permission_classes = [IsPropertyOwner]
    pagination_class = PropertyPagination
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = PropertyFilterSet
    search_fields = ["title", "city", "address"]
    ordering_fields = ["price", "created_at"]
    ordering = ["-created_at"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def get_object(self):  # type: ignore
        try:
            return super().get_object()
        except Http404 as exc:
            raise NotFound("Not found") from exc

    def perform_create(self, serializer):  # type: ignore
        instance = serializer.save()
        logger.info(f"Property {instance.id} listed by user {instance.owner_id}")

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def sections(self, request):
        """Available listings grouped into rent and buy sections."""
        queryset = self.get_queryset().filter(status=Property.Status.AVAILABLE)
        data = PropertySerializer(queryset, many=True, context={"request": request}).data
        return Response(split_by_category(data))

    @action(
        detail=True,
        methods=["patch"],
        url_path="status",
        permission_classes=[permissions.IsAuthenticated, IsPropertyOwner],
    )
    def update_status(self, request, pk=None):  # type: ignore
        property_obj = self.get_object()
        serializer = PropertyStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_obj.status = serializer.validated_data["status"]
        property_obj.save(update_fields=["status", "updated_at"])
        logger.info(f"Property {property_obj.id} status set to {property_obj.status}")
        return Response(
            {
                "message": "Status updated successfully",
                "property": {"id": property_obj.id, "status": property_obj.status},
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):
        """Properties owned by the current user, newest first."""
        queryset = Property.objects.filter(owner=request.user).order_by("-created_at")
        return Response({"properties": MyPropertySerializer(queryset, many=True).data})
