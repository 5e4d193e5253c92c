"""API views for owner revenue.

Revenue records are created by the booking payment flow; owners can only
read their own records and the aggregated earnings series used by the
dashboard chart.
"""

from __future__ import annotations

from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Revenue
from .serializers import EarningsQuerySerializer, RevenueSerializer
from .services import earnings_series


class RevenueViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Revenue of the current owner."""

    serializer_class = RevenueSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return Revenue.objects.select_related("property").filter(owner=self.request.user)

    @action(detail=False, methods=["get"])
    def earnings(self, request):
        query = EarningsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(earnings_series(request.user, query.validated_data["period"]))
