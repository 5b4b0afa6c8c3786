"""Serializers for reviews.

Read and write serializers for the ``Review`` model. The reviewer, the
reviewee and the review type are derived from the booking in the
service layer, never taken from the request.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Review

RATING_FIELDS = [
    "overall_rating",
    "cleanliness_rating",
    "communication_rating",
    "location_rating",
    "value_rating",
]


class ReviewUpdateSerializer(serializers.ModelSerializer):
    """Ratings and comment a reviewer may change."""

    class Meta:
        model = Review
        fields = [*RATING_FIELDS, "comment"]


class ReviewCreateSerializer(ReviewUpdateSerializer):
    booking_id = serializers.IntegerField()

    class Meta(ReviewUpdateSerializer.Meta):
        fields = ["booking_id", *ReviewUpdateSerializer.Meta.fields]


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer with reviewer and reviewee cards."""

    reviewer = UserSummarySerializer(read_only=True)
    reviewee = UserSummarySerializer(read_only=True)
    booking_id = serializers.ReadOnlyField()
    property_id = serializers.ReadOnlyField()
    property_title = serializers.ReadOnlyField(source="property.title")
    average_rating = serializers.ReadOnlyField()

    class Meta:
        model = Review
        fields = [
            "id",
            "booking_id",
            "property_id",
            "property_title",
            "reviewer",
            "reviewee",
            "review_type",
            *RATING_FIELDS,
            "average_rating",
            "comment",
            "host_response",
            "host_response_at",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class HostResponseSerializer(serializers.Serializer):
    host_response = serializers.CharField(max_length=2000)
