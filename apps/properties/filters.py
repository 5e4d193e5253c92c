"""FilterSet definitions for property listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """FilterSet for Property with the filters used by the listing pages."""

    category = django_filters.ChoiceFilter(choices=Property.Category.choices)
    property_type = django_filters.ChoiceFilter(choices=Property.PropertyType.choices)
    status = django_filters.ChoiceFilter(choices=Property.Status.choices)
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")

    price_min = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    bedrooms_min = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")
    owner = django_filters.NumberFilter(field_name="owner_id")

    class Meta:
        model = Property
        fields = [
            "category",
            "property_type",
            "status",
            "city",
            "owner",
        ]
