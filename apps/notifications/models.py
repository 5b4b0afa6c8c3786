"""Notification model.

An in-app notification delivered to one user. Notifications are created
by event handlers (new booking requests, confirmations, cancellations,
new chat messages) and consumed by their recipient, who can mark them
as read.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Kind(models.TextChoices):
        BOOKING_REQUEST = "booking_request", _("Booking request")
        BOOKING_CONFIRMED = "booking_confirmed", _("Booking confirmed")
        BOOKING_CANCELLED = "booking_cancelled", _("Booking cancelled")
        BOOKING_COMPLETED = "booking_completed", _("Stay completed")
        NEW_MESSAGE = "new_message", _("New message")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    kind = models.CharField(max_length=30, choices=Kind.choices)
    title = models.CharField(max_length=255)
    message = models.TextField()
    # Ids of the objects the notification is about, for client-side links
    payload = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_unread_idx"),
        ]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"
