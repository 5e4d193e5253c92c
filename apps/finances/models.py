"""Financial domain models for the Rambo marketplace."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Revenue(models.Model):
    """Money earned by an owner from a rent payment or a sale."""

    class RevenueType(models.TextChoices):
        RENT = "rent", _("Rent")
        SALE = "sale", _("Sale")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="revenues",
    )
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="revenues",
    )
    booking = models.OneToOneField(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="revenue",
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    revenue_type = models.CharField(max_length=10, choices=RevenueType.choices)
    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Revenue")
        verbose_name_plural = _("Revenue")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "created_at"], name="revenue_owner_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_revenue_type_display()} {self.amount} for {self.owner_id}"
