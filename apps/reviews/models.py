"""Models for the review domain.

Defines the ``Review`` entity: feedback left by one party of a completed
booking about the other. A guest reviews the host and the place, a host
reviews the guest. Each participant can review a booking only once.
"""

from __future__ import annotations

import builtins

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

RATING_VALIDATORS = [MinValueValidator(1), MaxValueValidator(5)]


class Review(models.Model):
    """A review written by a booking participant."""

    class ReviewType(models.TextChoices):
        GUEST_TO_HOST = "guest_to_host", _("Guest to host")
        HOST_TO_GUEST = "host_to_guest", _("Host to guest")

    class Status(models.TextChoices):
        PUBLISHED = "published", _("Published")
        HIDDEN = "hidden", _("Hidden")

    booking = models.ForeignKey(
        "bookings.Booking", on_delete=models.CASCADE, related_name="reviews"
    )
    property = models.ForeignKey(
        "properties.Property", on_delete=models.CASCADE, related_name="reviews"
    )
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews_written"
    )
    reviewee = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews_received"
    )
    review_type = models.CharField(max_length=20, choices=ReviewType.choices)
    overall_rating = models.PositiveSmallIntegerField(
        validators=RATING_VALIDATORS,
        help_text=_("Rating from 1 to 5"),
    )

    # Optional category ratings
    cleanliness_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    communication_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    location_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    value_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=RATING_VALIDATORS)
    comment = models.TextField(blank=True)

    host_response = models.TextField(blank=True)
    host_response_at = models.DateTimeField(null=True, blank=True)

    # Moderation
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PUBLISHED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Review")
        verbose_name_plural = _("Reviews")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["booking", "reviewer"], name="review_unique_booking_reviewer"),
        ]
        indexes = [
            models.Index(fields=["property", "-created_at"], name="review_property_created_idx"),
            models.Index(fields=["reviewee"], name="review_reviewee_idx"),
            models.Index(fields=["overall_rating"], name="review_rating_idx"),
        ]

    def __str__(self) -> str:
        return f"Review by {self.reviewer_id} for booking {self.booking_id} (Rating: {self.overall_rating})"

    @builtins.property
    def has_host_response(self) -> bool:
        return bool(self.host_response)

    @builtins.property
    def average_rating(self) -> float:
        """Mean over the overall rating and every category rating given."""
        ratings = [
            self.overall_rating,
            self.cleanliness_rating,
            self.communication_rating,
            self.location_rating,
            self.value_rating,
        ]
        valid_ratings = [r for r in ratings if r is not None]
        return round(sum(valid_ratings) / len(valid_ratings), 2)
