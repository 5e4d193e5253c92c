"""Property domain models for the Rambo marketplace.

A property is listed by an owner either for rent or for sale. Only some
property types make sense per category (nobody sells a single room), and
that rule is enforced both in validation and by a database constraint.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """Listing published by an owner for rent or for sale."""

    class PropertyType(models.TextChoices):
        HOUSE = "house", _("House")
        APARTMENT = "apartment", _("Apartment")
        ROOM = "room", _("Room")
        VILLA = "villa", _("Villa")

    class Category(models.TextChoices):
        RENT = "rent", _("Rent")
        BUY = "buy", _("Buy")

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        RENTED = "rented", _("Rented")
        BOUGHT = "bought", _("Bought")

    ALLOWED_TYPES_BY_CATEGORY: dict[str, tuple[str, ...]] = {
        Category.RENT: (
            PropertyType.ROOM,
            PropertyType.HOUSE,
            PropertyType.APARTMENT,
            PropertyType.VILLA,
        ),
        Category.BUY: (
            PropertyType.HOUSE,
            PropertyType.APARTMENT,
        ),
    }

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    property_type = models.CharField(max_length=20, choices=PropertyType.choices)
    category = models.CharField(max_length=10, choices=Category.choices)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    bathrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    area = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Living area in square meters."),
    )
    images = models.JSONField(default=list, blank=True, help_text=_("Image URLs, cover first."))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "status"], name="prop_category_status_idx"),
            models.Index(fields=["owner", "status"], name="prop_owner_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(category="rent", property_type__in=["room", "house", "apartment", "villa"])
                    | models.Q(category="buy", property_type__in=["house", "apartment"])
                ),
                name="property_type_allowed_for_category",
            ),
        ]

    def __str__(self) -> str:
        return self.title

    def clean(self) -> None:
        super().clean()
        allowed = self.ALLOWED_TYPES_BY_CATEGORY.get(self.category, ())
        if self.property_type and self.property_type not in allowed:
            raise ValidationError(
                {"property_type": _("This property type is not allowed for the selected category.")}
            )

    @property
    def cover_image(self) -> str | None:
        return self.images[0] if self.images else None

    def is_available(self) -> bool:
        return self.status == self.Status.AVAILABLE
