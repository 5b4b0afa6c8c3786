"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from shared.application.uow import DjangoUnitOfWork

from .calendar import lock_for_update
from .domain.events import BookingCompleted
from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Move confirmed bookings whose check-out date has passed to COMPLETED.

    Completed stays keep their calendar nights and become reviewable.
    Runs hourly through Celery Beat.

    Returns:
        dict: {"completed": number of bookings completed}
    """
    today = timezone.localdate()
    completed_count = 0

    candidate_ids = list(
        Booking.objects.filter(
            status=Booking.Status.CONFIRMED,
            check_out__lte=today,
        ).values_list("pk", flat=True)
    )

    for booking_id in candidate_ids:
        try:
            with DjangoUnitOfWork() as uow:
                booking = lock_for_update(Booking.objects.filter(pk=booking_id)).get()
                if booking.status != Booking.Status.CONFIRMED:
                    continue
                booking.status = Booking.Status.COMPLETED
                booking.save(update_fields=["status", "updated_at"])
                uow.add_event(
                    BookingCompleted(
                        aggregate_id=booking.pk,
                        booking_id=booking.pk,
                        property_id=booking.property_id,
                        guest_id=booking.guest_id,
                        host_id=booking.host_id,
                    )
                )
            completed_count += 1
            logger.info(f"Booking {booking_id} completed")
        except Exception as e:
            logger.error(f"Error completing booking {booking_id}: {e}", exc_info=True)

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}
