"""API views for the booking domain."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    CancelSerializer,
    PaymentSerializer,
)
from .services import (
    BookingError,
    cancel_booking,
    complete_booking,
    create_booking,
    process_payment,
)


class IsBookingParticipant(permissions.BasePermission):
    """Only the customer and the property owner can see or change a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        return obj.is_participant(request.user)


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for creating and managing bookings."""

    queryset = Booking.objects.select_related("property", "customer", "owner").prefetch_related(
        "ratings"
    )
    permission_classes = [permissions.IsAuthenticated, IsBookingParticipant]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "payment":
            return PaymentSerializer
        if self.action == "cancel":
            return CancelSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list":
            user = self.request.user
            return qs.filter(Q(customer=user) | Q(owner=user))
        return qs

    def _booking_response(self, message: str, booking: Booking, code: int = status.HTTP_200_OK):
        booking = self.get_queryset().get(pk=booking.pk)
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response({"message": message, "booking": data}, status=code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        try:
            booking = create_booking(
                request.user,
                data.pop("property_id"),
                data.pop("booking_type"),
                **data,
            )
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=exc.status_code)
        return self._booking_response(
            "Booking created successfully", booking, status.HTTP_201_CREATED
        )

    @action(detail=False, methods=["post"])
    def payment(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = process_payment(request.user, **serializer.validated_data)
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=exc.status_code)
        return self._booking_response("Payment processed successfully", booking)

    @action(detail=True, methods=["post", "patch"])
    def complete(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        try:
            complete_booking(booking, request.user)
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=exc.status_code)
        return self._booking_response("Booking marked as completed", booking)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            cancel_booking(booking, request.user, serializer.validated_data["reason"])
        except BookingError as exc:
            return Response({"detail": str(exc)}, status=exc.status_code)
        return self._booking_response("Booking cancelled", booking)
