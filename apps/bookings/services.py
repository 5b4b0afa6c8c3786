"""Domain services for booking workflows.

Every operation takes the acting user explicitly and raises the shared
domain exceptions; the API layer only translates HTTP to calls here.
Writes run inside a unit of work so the booking row, its calendar nights
and the emitted events either all happen or none do.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from django.db.models import Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.properties.models import Property
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from shared.domain.value_objects import DateRange

from .calendar import lock_for_update, release_dates, reserve_dates
from .domain.events import BookingCancelled, BookingConfirmed, BookingCreated
from .models import Booking
from .pricing import price_for_property

logger = logging.getLogger(__name__)

LIST_ROLES = ("guest", "host", "both")


def _validate_stay(property_obj: Property, guest, date_range: DateRange, guest_count: int) -> None:
    if not property_obj.is_bookable:
        raise ValidationError.for_field("property_id", "Property is not available for booking.")
    if property_obj.host_id == guest.pk:
        raise ValidationError.for_field("property_id", "You cannot book your own property.")
    if guest_count < 1 or guest_count > property_obj.max_guests:
        raise ValidationError.for_field(
            "guest_count", f"Between 1 and {property_obj.max_guests} guests are allowed."
        )

    nights = date_range.nights
    if nights < property_obj.minimum_stay_weeks * 7:
        raise ValidationError.for_field(
            "check_out", f"Minimum stay for this property is {property_obj.minimum_stay_weeks} weeks."
        )
    if nights / 30 > property_obj.maximum_stay_months:
        raise ValidationError.for_field(
            "check_out", f"Maximum stay for this property is {property_obj.maximum_stay_months} months."
        )


def create_booking(
    guest,
    *,
    property_id: int | None,
    check_in: date | None,
    check_out: date | None,
    guest_count: int = 1,
    special_requests: str = "",
) -> Booking:
    """Create a booking and reserve its nights atomically.

    Raises:
        ValidationError: missing ids/dates, inverted range or a stay the
            property does not accept
        NotFoundError: unknown property
        ConflictError: any night already booked or blocked
    """
    missing = {
        name: ["This field is required."]
        for name, value in (("property_id", property_id), ("check_in", check_in), ("check_out", check_out))
        if value is None
    }
    if missing:
        raise ValidationError("Missing required fields.", details=missing)
    if check_in >= check_out:
        raise ValidationError.for_field("check_out", "Check-out date must be after check-in date.")
    if check_in < timezone.localdate():
        raise ValidationError.for_field("check_in", "Check-in date cannot be in the past.")

    try:
        property_obj = Property.objects.get(pk=property_id)
    except Property.DoesNotExist:
        raise NotFoundError("Property not found.")

    date_range = DateRange(check_in, check_out)
    _validate_stay(property_obj, guest, date_range, guest_count)
    pricing = price_for_property(property_obj, date_range.nights)

    with DjangoUnitOfWork() as uow:
        booking = Booking.objects.create(
            property=property_obj,
            guest=guest,
            host_id=property_obj.host_id,
            check_in=check_in,
            check_out=check_out,
            nights=pricing.nights,
            guest_count=guest_count,
            subtotal_cents=pricing.subtotal_cents,
            service_fee_cents=pricing.service_fee_cents,
            cleaning_fee_cents=pricing.cleaning_fee_cents,
            security_deposit_cents=pricing.security_deposit_cents,
            total_cents=pricing.total_cents,
            special_requests=special_requests,
            status=Booking.Status.CONFIRMED if property_obj.instant_book else Booking.Status.PENDING,
            confirmed_at=timezone.now() if property_obj.instant_book else None,
        )
        reserve_dates(booking)
        uow.add_event(
            BookingCreated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                property_id=property_obj.pk,
                guest_id=guest.pk,
                host_id=property_obj.host_id,
                check_in=check_in,
                check_out=check_out,
                total_cents=booking.total_cents,
                status=booking.status,
            )
        )

    logger.info(
        "Booking %s created for property %s by guest %s (%s, %s cents)",
        booking.pk,
        property_obj.pk,
        guest.pk,
        date_range,
        booking.total_cents,
    )
    return booking


def _load(booking_id: Any, *, for_update: bool = False) -> Booking:
    qs = Booking.objects.all()
    if for_update:
        qs = lock_for_update(qs)
    else:
        qs = qs.select_related("property", "guest", "host")
    try:
        return qs.get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Booking not found.")


def _ensure_participant(booking: Booking, user) -> None:
    if not booking.is_participant(user):
        raise ForbiddenError("Only the guest or the host can access this booking.")


def _ensure_host(booking: Booking, user) -> None:
    if booking.host_id != user.pk:
        raise ForbiddenError("Only the host can perform this action.")


def get_booking(booking_id: Any, user) -> Booking:
    booking = _load(booking_id)
    _ensure_participant(booking, user)
    return booking


def list_bookings(
    user,
    role: str = "both",
    *,
    status: str | None = None,
    property_id: int | None = None,
    upcoming: bool = False,
) -> QuerySet:
    """Bookings where the user is guest, host or either; newest first."""

    if role not in LIST_ROLES:
        raise ValidationError.for_field("role", f"Role must be one of: {', '.join(LIST_ROLES)}.")
    if status is not None and status not in Booking.Status.values:
        raise ValidationError.for_field("status", f"Unknown status '{status}'.")

    qs = Booking.objects.select_related("property", "guest", "host")
    if role == "guest":
        qs = qs.filter(guest=user)
    elif role == "host":
        qs = qs.filter(host=user)
    else:
        qs = qs.filter(Q(guest=user) | Q(host=user))

    if status:
        qs = qs.filter(status=status)
    if property_id is not None:
        qs = qs.filter(property_id=property_id)
    if upcoming:
        qs = qs.filter(check_in__gte=timezone.localdate())
    return qs.order_by("-created_at", "-pk")


def _release(booking: Booking, user, reason: str, uow: DjangoUnitOfWork) -> None:
    booking.mark_cancelled(user, reason)
    release_dates(booking)
    uow.add_event(
        BookingCancelled(
            aggregate_id=booking.pk,
            booking_id=booking.pk,
            property_id=booking.property_id,
            guest_id=booking.guest_id,
            host_id=booking.host_id,
            cancelled_by_id=user.pk,
            reason=reason,
        )
    )


def cancel_booking(booking_id: Any, user, reason: str = "") -> Booking:
    """Cancel a booking and free its nights.

    A second cancel is a ConflictError rather than a silent no-op, so
    clients learn that their view of the booking was stale.
    """
    with DjangoUnitOfWork() as uow:
        booking = _load(booking_id, for_update=True)
        _ensure_participant(booking, user)
        if booking.status == Booking.Status.CANCELLED:
            raise ConflictError("Booking is already cancelled.")
        if booking.status == Booking.Status.COMPLETED:
            raise ConflictError("Completed bookings cannot be cancelled.")
        _release(booking, user, reason, uow)

    logger.info("Booking %s cancelled by user %s", booking.pk, user.pk)
    return booking


def accept_booking(booking_id: Any, user) -> Booking:
    with DjangoUnitOfWork() as uow:
        booking = _load(booking_id, for_update=True)
        _ensure_host(booking, user)
        if booking.status != Booking.Status.PENDING:
            raise ConflictError(f"Only pending bookings can be accepted (current status: {booking.status}).")
        booking.mark_confirmed()
        uow.add_event(
            BookingConfirmed(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                property_id=booking.property_id,
                guest_id=booking.guest_id,
                host_id=booking.host_id,
            )
        )

    logger.info("Booking %s accepted by host %s", booking.pk, user.pk)
    return booking


def decline_booking(booking_id: Any, user, reason: str = "") -> Booking:
    with DjangoUnitOfWork() as uow:
        booking = _load(booking_id, for_update=True)
        _ensure_host(booking, user)
        if booking.status != Booking.Status.PENDING:
            raise ConflictError(f"Only pending bookings can be declined (current status: {booking.status}).")
        _release(booking, user, reason, uow)

    logger.info("Booking %s declined by host %s", booking.pk, user.pk)
    return booking


def record_payment(booking_id: Any, user) -> Booking:
    """Record that the guest paid; no payment provider is involved."""

    with DjangoUnitOfWork():
        booking = _load(booking_id, for_update=True)
        if booking.guest_id != user.pk:
            raise ForbiddenError("Only the guest can pay for this booking.")
        if booking.status != Booking.Status.CONFIRMED:
            raise ConflictError("Only confirmed bookings can be paid.")
        if booking.payment_status != Booking.PaymentStatus.PENDING:
            raise ConflictError("Payment has already been recorded.")
        booking.mark_paid()

    logger.info("Payment recorded for booking %s", booking.pk)
    return booking


def booking_invoice(booking_id: Any, user) -> dict[str, Any]:
    booking = get_booking(booking_id, user)
    nightly_rate = booking.subtotal_cents // booking.nights
    return {
        "booking_id": booking.pk,
        "property_title": booking.property.title,
        "check_in": booking.check_in,
        "check_out": booking.check_out,
        "nights": booking.nights,
        "line_items": [
            {
                "description": f"{nightly_rate} x {booking.nights} nights",
                "amount_cents": booking.subtotal_cents,
            },
            {"description": "Service fee", "amount_cents": booking.service_fee_cents},
            {"description": "Cleaning fee", "amount_cents": booking.cleaning_fee_cents},
        ],
        "total_cents": booking.total_cents,
        "security_deposit_cents": booking.security_deposit_cents,
        "payment_status": booking.payment_status,
    }
