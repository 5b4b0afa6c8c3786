"""Chat domain models.

Provides messaging between two users (usually a student and a host).
Conversations can be tied to a property or a booking for context.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

PREVIEW_LENGTH = 200


class Conversation(models.Model):
    """A conversation between two distinct users."""

    participant_one = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversations_started",
        help_text=_("User who opened the conversation"),
    )
    participant_two = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversations_received",
    )

    # Optional context
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
    )
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
    )

    # Last message info for quick access
    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_preview = models.CharField(max_length=PREVIEW_LENGTH, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Conversation")
        verbose_name_plural = _("Conversations")
        ordering = ["-last_message_at", "-created_at"]
        indexes = [
            models.Index(fields=["participant_one", "-last_message_at"], name="chat_one_last_message_idx"),
            models.Index(fields=["participant_two", "-last_message_at"], name="chat_two_last_message_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(participant_one=models.F("participant_two")),
                name="chat_conversation_different_users",
            )
        ]

    def __str__(self) -> str:
        return f"Conversation between {self.participant_one_id} and {self.participant_two_id}"

    def has_participant(self, user) -> bool:
        return user.pk in (self.participant_one_id, self.participant_two_id)

    def other_participant_id(self, user) -> int | None:
        if user.pk == self.participant_one_id:
            return self.participant_two_id
        if user.pk == self.participant_two_id:
            return self.participant_one_id
        return None

    def get_other_user(self, user):
        """The other participant in the conversation."""
        if user.pk == self.participant_one_id:
            return self.participant_two
        if user.pk == self.participant_two_id:
            return self.participant_one
        return None


class Message(models.Model):
    """A single text message in a conversation."""

    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    body = models.TextField()
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Message")
        verbose_name_plural = _("Messages")
        ordering = ["created_at", "pk"]
        indexes = [
            models.Index(fields=["conversation", "created_at"], name="chat_message_created_idx"),
            models.Index(fields=["recipient", "read_at"], name="chat_message_unread_idx"),
        ]

    def __str__(self) -> str:
        preview = self.body[:50] + "..." if len(self.body) > 50 else self.body
        return f"Message from {self.sender_id} at {self.created_at}: {preview}"

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def save(self, *args, **kwargs):
        """Update conversation metadata when saving a new message."""
        is_new = self.pk is None
        super().save(*args, **kwargs)

        if is_new:
            self.conversation.last_message_at = self.created_at or timezone.now()
            self.conversation.last_message_preview = self.body[:PREVIEW_LENGTH]
            self.conversation.save(update_fields=["last_message_at", "last_message_preview", "updated_at"])
