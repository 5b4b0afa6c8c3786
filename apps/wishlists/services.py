"""Wishlist operations."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore

from apps.properties.models import Property
from shared.domain.exceptions import ConflictError, NotFoundError

from .models import Wishlist, WishlistItem

logger = logging.getLogger(__name__)


def add_property(wishlist: Wishlist, property_id: int) -> WishlistItem:
    try:
        property_obj = Property.objects.get(pk=property_id)
    except Property.DoesNotExist:
        raise NotFoundError("Property not found.")

    try:
        with transaction.atomic():
            item = WishlistItem.objects.create(wishlist=wishlist, property=property_obj)
    except IntegrityError as exc:
        raise ConflictError("Property is already in this wishlist.") from exc

    wishlist.save(update_fields=["updated_at"])
    logger.info("Property %s added to wishlist %s", property_id, wishlist.pk)
    return item


def remove_property(wishlist: Wishlist, property_id: int) -> None:
    deleted, _ = WishlistItem.objects.filter(wishlist=wishlist, property_id=property_id).delete()
    if not deleted:
        raise NotFoundError("Property is not in this wishlist.")
    wishlist.save(update_fields=["updated_at"])


def wishlists_containing(user, property_id: int) -> list[int]:
    return list(
        WishlistItem.objects.filter(wishlist__user=user, property_id=property_id)
        .order_by("wishlist_id")
        .values_list("wishlist_id", flat=True)
    )
