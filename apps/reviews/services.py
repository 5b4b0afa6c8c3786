"""Domain services for reviews."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from shared.domain.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError

from .models import Review

logger = logging.getLogger(__name__)

DELETE_WINDOW = timedelta(hours=48)


def _load(review_id: Any) -> Review:
    try:
        return Review.objects.select_related("property", "reviewer", "reviewee").get(pk=review_id)
    except (Review.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Review not found.")


def create_review(user, *, booking_id: int, **ratings: Any) -> Review:
    """Review the other party of a completed booking.

    A guest reviews the host (and the place); a host reviews the guest.
    """
    try:
        booking = Booking.objects.get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFoundError("Booking not found.")

    if not booking.is_participant(user):
        raise ForbiddenError("You can only review bookings you were part of.")
    if booking.status != Booking.Status.COMPLETED:
        raise ValidationError.for_field("booking_id", "Only completed bookings can be reviewed.")

    is_guest = booking.guest_id == user.pk
    if Review.objects.filter(booking=booking, reviewer=user).exists():
        raise ConflictError("You have already reviewed this booking.")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                booking=booking,
                property_id=booking.property_id,
                reviewer=user,
                reviewee_id=booking.host_id if is_guest else booking.guest_id,
                review_type=Review.ReviewType.GUEST_TO_HOST if is_guest else Review.ReviewType.HOST_TO_GUEST,
                **ratings,
            )
    except IntegrityError as exc:
        raise ConflictError("You have already reviewed this booking.") from exc

    logger.info("Review %s created for booking %s by user %s", review.pk, booking.pk, user.pk)
    return review


def update_review(review_id: Any, user, **changes: Any) -> Review:
    review = _load(review_id)
    if review.reviewer_id != user.pk:
        raise ForbiddenError("You can only update your own reviews.")
    if review.has_host_response:
        raise ValidationError("Cannot update a review after the host has responded.")

    for attr, value in changes.items():
        setattr(review, attr, value)
    review.save()
    return review


def delete_review(review_id: Any, user) -> None:
    review = _load(review_id)
    if review.reviewer_id != user.pk:
        raise ForbiddenError("You can only delete your own reviews.")
    if review.has_host_response:
        raise ValidationError("Cannot delete a review after the host has responded.")
    if timezone.now() - review.created_at > DELETE_WINDOW:
        raise ValidationError("Reviews can only be deleted within 48 hours of posting.")

    review.delete()
    logger.info("Review %s deleted by user %s", review_id, user.pk)


def respond_to_review(review_id: Any, user, response: str) -> Review:
    """Host answer to a guest's review; one answer per review."""

    with transaction.atomic():
        try:
            review = Review.objects.select_for_update().get(pk=review_id)
        except (Review.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Review not found.")

        if review.review_type != Review.ReviewType.GUEST_TO_HOST:
            raise ValidationError("Only guest-to-host reviews can receive host responses.")
        if review.property.host_id != user.pk:
            raise ForbiddenError("Only the property host can respond to this review.")
        if review.has_host_response:
            raise ConflictError("You have already responded to this review.")

        review.host_response = response
        review.host_response_at = timezone.now()
        review.save(update_fields=["host_response", "host_response_at", "updated_at"])

    logger.info("Host %s responded to review %s", user.pk, review.pk)
    return review
