"""Category rules for property listings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import Property


def allowed_types_for(category: str) -> list[str]:
    """Return the property types that may be listed under ``category``."""
    return [str(value) for value in Property.ALLOWED_TYPES_BY_CATEGORY.get(category, ())]


def is_valid_type_for_category(property_type: str, category: str) -> bool:
    return property_type in allowed_types_for(category)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def split_by_category(properties: Iterable[Any]) -> dict[str, list[Any]]:
    """Group listings into rent and buy sections.

    Works on model instances or serialized dicts. Listings whose type is not
    allowed for their category are left out of both sections.
    """
    sections: dict[str, list[Any]] = {
        Property.Category.RENT: [],
        Property.Category.BUY: [],
    }
    for item in properties:
        category = _field(item, "category")
        if category in sections and is_valid_type_for_category(_field(item, "property_type"), category):
            sections[category].append(item)
    return {"rent": sections[Property.Category.RENT], "buy": sections[Property.Category.BUY]}
