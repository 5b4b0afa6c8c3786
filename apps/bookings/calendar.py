"""Booking calendar: per-night availability rows and their transitions.

Every write goes through a function here. Reserving or blocking nights
first locks the affected rows, refuses the whole range if any night is
already booked or blocked, and relies on the (property, date) unique
constraint to turn a racing insert into a conflict.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import ConflictError
from shared.domain.value_objects import DateRange

from .models import BookingCalendar

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.properties.models import Property

    from .models import Booking

logger = logging.getLogger(__name__)

Status = BookingCalendar.Status


def lock_for_update(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _occupy(
    property_obj: "Property",
    date_range: DateRange,
    *,
    status: str,
    booking: "Booking | None" = None,
    note: str = "",
) -> int:
    nights = list(date_range.dates())
    rows = lock_for_update(
        BookingCalendar.objects.filter(property=property_obj, date__in=nights)
    )
    existing = {row.date: row for row in rows}

    taken = sorted(day for day, row in existing.items() if row.status != Status.AVAILABLE)
    if taken:
        logger.info(
            "Calendar conflict for property %s on %s",
            property_obj.pk,
            ", ".join(day.isoformat() for day in taken),
        )
        raise ConflictError(
            "The property is not available for the selected dates.",
            details={"dates": [day.isoformat() for day in taken]},
        )

    if existing:
        updated = BookingCalendar.objects.filter(
            pk__in=[row.pk for row in existing.values()],
            status=Status.AVAILABLE,
        ).update(status=status, booking=booking, note=note, updated_at=timezone.now())
        if updated != len(existing):
            raise ConflictError("The property is not available for the selected dates.")

    missing = [day for day in nights if day not in existing]
    if missing:
        try:
            with transaction.atomic():
                BookingCalendar.objects.bulk_create(
                    [
                        BookingCalendar(
                            property=property_obj,
                            date=day,
                            status=status,
                            booking=booking,
                            note=note,
                        )
                        for day in missing
                    ]
                )
        except IntegrityError as exc:
            logger.warning("Concurrent calendar write for property %s: %s", property_obj.pk, exc)
            raise ConflictError("The property is not available for the selected dates.") from exc

    return len(nights)


@transaction.atomic
def reserve_dates(booking: "Booking") -> int:
    """Mark every night of the booking as booked by it."""

    return _occupy(booking.property, booking.date_range, status=Status.BOOKED, booking=booking)


@transaction.atomic
def release_dates(booking: "Booking") -> int:
    """Return the booking's nights to the pool; other bookings are untouched."""

    released = BookingCalendar.objects.filter(booking=booking, status=Status.BOOKED).update(
        status=Status.AVAILABLE,
        booking=None,
        note="",
        updated_at=timezone.now(),
    )
    logger.info("Released %s nights of booking %s", released, booking.pk)
    return released


@transaction.atomic
def block_dates(property_obj: "Property", date_range: DateRange, note: str = "") -> int:
    """Host-initiated block of `[start, end)`; all or nothing."""

    blocked = _occupy(property_obj, date_range, status=Status.BLOCKED, note=note)
    logger.info("Blocked %s nights of property %s (%s)", blocked, property_obj.pk, date_range)
    return blocked


@transaction.atomic
def unblock_dates(property_obj: "Property", date_range: DateRange) -> int:
    """Release host blocks in `[start, end)`; booked nights stay booked."""

    return BookingCalendar.objects.filter(
        property=property_obj,
        date__gte=date_range.start_date,
        date__lt=date_range.end_date,
        status=Status.BLOCKED,
    ).update(status=Status.AVAILABLE, note="", updated_at=timezone.now())


def query_availability(
    property_obj: "Property",
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict]:
    """Non-available nights of a property, oldest first.

    Both bounds are inclusive and optional.
    """

    qs = BookingCalendar.objects.filter(property=property_obj).exclude(status=Status.AVAILABLE)
    if start_date is not None:
        qs = qs.filter(date__gte=start_date)
    if end_date is not None:
        qs = qs.filter(date__lte=end_date)
    return list(qs.order_by("date").values("date", "status"))


def unavailable_property_ids(date_range: DateRange):
    """Ids of properties with at least one booked or blocked night in range."""

    return (
        BookingCalendar.objects.filter(
            date__gte=date_range.start_date,
            date__lt=date_range.end_date,
        )
        .exclude(status=Status.AVAILABLE)
        .values_list("property_id", flat=True)
        .distinct()
    )
