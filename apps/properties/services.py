"""Domain services for property listings."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore

from shared.domain.exceptions import ForbiddenError, ValidationError

from .models import Property

logger = logging.getLogger(__name__)


def ensure_can_host(user) -> None:
    if not user.can_host():
        raise ForbiddenError("Only hosts can create properties.")


def ensure_is_host(property_obj: Property, user) -> None:
    if property_obj.host_id != user.id:
        raise ForbiddenError("You can only manage your own properties.")


@transaction.atomic
def deactivate_property(property_obj: Property, user) -> Property:
    """Soft delete: the listing goes inactive, history stays intact."""

    from apps.bookings.models import Booking  # Local import to prevent circular dependency

    ensure_is_host(property_obj, user)
    has_active_stays = Booking.objects.filter(
        property=property_obj,
        status__in=[Booking.Status.CONFIRMED, Booking.Status.COMPLETED],
    ).exists()
    if has_active_stays:
        raise ValidationError("Cannot delete a property with confirmed or completed bookings.")

    property_obj.status = Property.Status.INACTIVE
    property_obj.save(update_fields=["status", "updated_at"])
    logger.info("Property %s deactivated by host %s", property_obj.pk, user.pk)
    return property_obj
