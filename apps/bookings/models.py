"""Booking domain models for the Rambo marketplace."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A customer's request to rent or buy a property.

    Rentals carry a payment status and are confirmed once paid. Purchases
    are arranged at a meeting and never go through the payment flow.
    """

    class BookingType(models.TextChoices):
        RENT = "rent", _("Rent")
        BUY = "buy", _("Buy")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Awaiting payment")
        PAID = "paid", _("Paid")
        REFUNDED = "refunded", _("Refunded")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owner_bookings",
    )
    booking_type = models.CharField(max_length=10, choices=BookingType.choices)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        null=True,
        blank=True,
    )
    payment_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    payment_method = models.CharField(max_length=50, blank=True)
    payment_intent_id = models.CharField(max_length=100, blank=True)
    payment_date = models.DateTimeField(null=True, blank=True)
    meeting_date = models.DateTimeField(null=True, blank=True)
    meeting_location = models.CharField(max_length=255, blank=True)
    meeting_notes = models.TextField(blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "status"], name="booking_customer_status_idx"),
            models.Index(fields=["owner", "status"], name="booking_owner_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for {self.property_id}"

    def is_participant(self, user) -> bool:
        return user.id in (self.customer_id, self.owner_id)

    def other_party_id(self, user) -> int:
        return self.owner_id if user.id == self.customer_id else self.customer_id

    def mark_paid(self, amount: Decimal, method: str, intent_id: str) -> None:
        self.payment_status = self.PaymentStatus.PAID
        self.payment_amount = amount
        self.payment_method = method
        self.payment_intent_id = intent_id
        self.payment_date = timezone.now()
        self.status = self.Status.CONFIRMED
        self.save(
            update_fields=[
                "payment_status",
                "payment_amount",
                "payment_method",
                "payment_intent_id",
                "payment_date",
                "status",
                "updated_at",
            ]
        )

    def mark_completed(self) -> None:
        self.status = self.Status.COMPLETED
        self.completed_at = timezone.now()
        self.save(update_fields=["status", "completed_at", "updated_at"])

    def mark_cancelled(self, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        if self.payment_status == self.PaymentStatus.PAID:
            self.payment_status = self.PaymentStatus.REFUNDED
        self.save(
            update_fields=[
                "status",
                "cancellation_reason",
                "cancelled_at",
                "payment_status",
                "updated_at",
            ]
        )
