"""Models for wishlists.

A ``Wishlist`` is a named collection of properties owned by one user.
A property appears at most once per wishlist, but may be saved in
several of the user's wishlists.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Wishlist(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="wishlists"
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Wishlist")
        verbose_name_plural = _("Wishlists")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} (user {self.user_id})"


class WishlistItem(models.Model):
    """A property saved in a wishlist."""

    wishlist = models.ForeignKey(Wishlist, on_delete=models.CASCADE, related_name="items")
    property = models.ForeignKey(
        "properties.Property", on_delete=models.CASCADE, related_name="wishlist_items"
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-added_at"]
        constraints = [
            models.UniqueConstraint(fields=["wishlist", "property"], name="wishlist_item_unique_property"),
        ]

    def __str__(self) -> str:
        return f"Property {self.property_id} in wishlist {self.wishlist_id}"
