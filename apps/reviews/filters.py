"""FilterSet for the public review list."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Review


class ReviewFilterSet(django_filters.FilterSet):
    property = django_filters.NumberFilter(field_name="property_id")
    reviewer = django_filters.NumberFilter(field_name="reviewer_id")
    reviewee = django_filters.NumberFilter(field_name="reviewee_id")
    review_type = django_filters.ChoiceFilter(choices=Review.ReviewType.choices)
    min_rating = django_filters.NumberFilter(field_name="overall_rating", lookup_expr="gte")

    class Meta:
        model = Review
        fields = ["property", "reviewer", "reviewee", "review_type"]
