"""FilterSet definitions for property listing and search."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """Filters accepted by the property list endpoint."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    property_type = django_filters.ChoiceFilter(choices=Property.PropertyType.choices)
    min_price = django_filters.NumberFilter(field_name="monthly_price_cents", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="monthly_price_cents", lookup_expr="lte")
    bedrooms = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")
    guests = django_filters.NumberFilter(field_name="max_guests", lookup_expr="gte")
    instant_book = django_filters.BooleanFilter(field_name="instant_book")
    # Comma separated amenity ids; a listing must have all of them
    amenities = django_filters.CharFilter(method="filter_amenities")

    class Meta:
        model = Property
        fields = ["city", "country", "property_type", "instant_book"]

    def filter_amenities(self, queryset, name, value):  # type: ignore
        try:
            ids = [int(x) for x in str(value).replace(" ", "").split(",") if x]
        except ValueError:
            return queryset.none()
        for amenity_id in ids:
            queryset = queryset.filter(amenities__id=amenity_id)
        return queryset.distinct()
