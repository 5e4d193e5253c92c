"""Unit tests for property category rules."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError

from apps.properties.models import Property
from apps.properties.services import (
    allowed_types_for,
    is_valid_type_for_category,
    split_by_category,
)


def test_allowed_types_per_category():
    assert allowed_types_for("rent") == ["room", "house", "apartment", "villa"]
    assert allowed_types_for("buy") == ["house", "apartment"]
    assert allowed_types_for("lease") == []


@pytest.mark.parametrize(
    ("property_type", "category", "expected"),
    [
        ("room", "rent", True),
        ("villa", "rent", True),
        ("house", "buy", True),
        ("room", "buy", False),
        ("villa", "buy", False),
    ],
)
def test_is_valid_type_for_category(property_type, category, expected):
    assert is_valid_type_for_category(property_type, category) is expected


def test_split_by_category_drops_invalid_combinations():
    listings = [
        {"id": 1, "category": "rent", "property_type": "room"},
        {"id": 2, "category": "buy", "property_type": "apartment"},
        {"id": 3, "category": "buy", "property_type": "villa"},
        {"id": 4, "category": "rent", "property_type": "house"},
    ]

    sections = split_by_category(listings)

    assert [p["id"] for p in sections["rent"]] == [1, 4]
    assert [p["id"] for p in sections["buy"]] == [2]


def test_model_clean_rejects_room_for_sale():
    listing = Property(property_type="room", category="buy")
    with pytest.raises(ValidationError) as excinfo:
        listing.clean()
    assert "property_type" in excinfo.value.message_dict
