"""Domain services for booking workflows."""

from __future__ import annotations

import logging
import time
from decimal import Decimal

from django.db import transaction  # type: ignore

from apps.finances.services import record_rent_payment, reverse_rent_payment
from apps.notifications.services import (
    notify_booking_cancelled,
    notify_booking_completed,
    notify_booking_created,
    notify_payment_received,
)
from apps.properties.models import Property

from .models import Booking

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Raised when a booking action breaks a marketplace rule."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


def _ensure_participant(booking: Booking, user) -> None:
    if not booking.is_participant(user):
        raise BookingError("You are not a participant of this booking", status_code=403)


@transaction.atomic
def create_booking(customer, property_id: int, booking_type: str, **meeting) -> Booking:
    property_obj = Property.objects.select_for_update().filter(pk=property_id).first()
    if property_obj is None:
        raise BookingError("Property not found", status_code=404)
    if property_obj.owner_id == customer.id:
        raise BookingError("Cannot book your own property")
    if not property_obj.is_available():
        raise BookingError("Property is not available")
    if booking_type != property_obj.category:
        raise BookingError("Booking type does not match property category")

    booking = Booking.objects.create(
        property=property_obj,
        customer=customer,
        owner_id=property_obj.owner_id,
        booking_type=booking_type,
        status=Booking.Status.PENDING,
        payment_status=(
            Booking.PaymentStatus.PENDING if booking_type == Booking.BookingType.RENT else None
        ),
        **meeting,
    )
    logger.info(f"Booking {booking.id} created by {customer.id} for property {property_obj.id}")
    transaction.on_commit(lambda: notify_booking_created(booking))
    return booking


def generate_payment_intent_id() -> str:
    """Simulated processor reference: ``pi_`` followed by epoch milliseconds."""
    return f"pi_{int(time.time() * 1000)}"


@transaction.atomic
def process_payment(user, booking_id: int, amount: Decimal, payment_method: str) -> Booking:
    """Settle a rental payment and book the owner's revenue.

    No real gateway is called; the payment always succeeds.
    """
    booking = (
        Booking.objects.select_for_update()
        .select_related("property", "owner")
        .filter(pk=booking_id)
        .first()
    )
    if booking is None:
        raise BookingError("Booking not found", status_code=404)
    if booking.customer_id != user.id:
        raise BookingError("Only the customer can pay for this booking", status_code=403)
    if booking.booking_type != Booking.BookingType.RENT:
        raise BookingError("Payment only available for rent bookings")
    if booking.status == Booking.Status.CANCELLED:
        raise BookingError("Cannot pay for a cancelled booking")
    if booking.payment_status == Booking.PaymentStatus.PAID:
        raise BookingError("Booking is already paid")

    booking.mark_paid(amount, payment_method, generate_payment_intent_id())
    record_rent_payment(booking)
    logger.info(f"Booking {booking.id} paid: {amount} via {payment_method}")
    transaction.on_commit(lambda: notify_payment_received(booking))
    return booking


@transaction.atomic
def complete_booking(booking: Booking, user) -> Booking:
    _ensure_participant(booking, user)
    if booking.status == Booking.Status.CANCELLED:
        raise BookingError("Cannot complete a cancelled booking")
    if booking.status == Booking.Status.COMPLETED:
        raise BookingError("Booking is already completed")

    booking.mark_completed()
    logger.info(f"Booking {booking.id} completed by user {user.id}")
    transaction.on_commit(lambda: notify_booking_completed(booking, user))
    return booking


@transaction.atomic
def cancel_booking(booking: Booking, user, reason: str = "") -> Booking:
    _ensure_participant(booking, user)
    if booking.status in (Booking.Status.COMPLETED, Booking.Status.CANCELLED):
        raise BookingError("Cannot cancel a completed or cancelled booking")

    was_paid = booking.payment_status == Booking.PaymentStatus.PAID
    booking.mark_cancelled(reason)
    if was_paid:
        reverse_rent_payment(booking)
    logger.info(f"Booking {booking.id} cancelled by user {user.id}")
    transaction.on_commit(lambda: notify_booking_cancelled(booking, user))
    return booking
