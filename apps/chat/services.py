"""Chat services: conversations, messages and read receipts."""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Count, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.properties.models import Property
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ForbiddenError, NotFoundError, ValidationError

from .domain.events import MessageSent
from .models import PREVIEW_LENGTH, Conversation, Message

logger = logging.getLogger(__name__)

User = get_user_model()


def _between(user_a, user_b_id: int) -> Q:
    return Q(participant_one=user_a, participant_two_id=user_b_id) | Q(
        participant_one_id=user_b_id, participant_two=user_a
    )


def start_conversation(
    user,
    *,
    participant_id: int,
    property_id: int | None = None,
    booking_id: int | None = None,
) -> tuple[Conversation, bool]:
    """Return the conversation with this participant and context, creating it if needed.

    The second element of the result tells whether it was created.
    """
    if participant_id == user.pk:
        raise ValidationError.for_field("participant_id", "You cannot start a conversation with yourself.")
    if not User.objects.filter(pk=participant_id, is_active=True).exists():
        raise NotFoundError("User not found.")
    if property_id is not None and not Property.objects.filter(pk=property_id).exists():
        raise NotFoundError("Property not found.")
    if booking_id is not None:
        try:
            booking = Booking.objects.get(pk=booking_id)
        except Booking.DoesNotExist:
            raise NotFoundError("Booking not found.")
        if not booking.is_participant(user):
            raise ForbiddenError("You can only discuss bookings you are part of.")

    existing = (
        Conversation.objects.filter(_between(user, participant_id))
        .filter(property_id=property_id, booking_id=booking_id)
        .first()
    )
    if existing is not None:
        return existing, False

    conversation = Conversation.objects.create(
        participant_one=user,
        participant_two_id=participant_id,
        property_id=property_id,
        booking_id=booking_id,
    )
    logger.info("Conversation %s started by user %s with user %s", conversation.pk, user.pk, participant_id)
    return conversation, True


def list_conversations(user) -> QuerySet:
    """The user's conversations with their unread counts, most recent activity first."""

    return (
        Conversation.objects.filter(Q(participant_one=user) | Q(participant_two=user))
        .select_related("participant_one", "participant_two", "property")
        .annotate(
            unread_count=Count(
                "messages",
                filter=Q(messages__recipient=user, messages__read_at__isnull=True),
            )
        )
        .order_by("-last_message_at", "-created_at", "-pk")
    )


def get_conversation(conversation_id: Any, user) -> Conversation:
    try:
        conversation = Conversation.objects.select_related(
            "participant_one", "participant_two", "property"
        ).get(pk=conversation_id)
    except (Conversation.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Conversation not found.")
    if not conversation.has_participant(user):
        raise ForbiddenError("You are not a participant of this conversation.")
    return conversation


def send_message(conversation_id: Any, user, body: str) -> Message:
    conversation = get_conversation(conversation_id, user)
    body = body.strip()
    if not body:
        raise ValidationError.for_field("body", "Message cannot be empty.")

    with DjangoUnitOfWork() as uow:
        message = Message.objects.create(
            conversation=conversation,
            sender=user,
            recipient_id=conversation.other_participant_id(user),
            body=body,
        )
        uow.add_event(
            MessageSent(
                aggregate_id=conversation.pk,
                conversation_id=conversation.pk,
                message_id=message.pk,
                sender_id=user.pk,
                recipient_id=message.recipient_id,
                preview=body[:PREVIEW_LENGTH],
            )
        )

    logger.info("Message %s sent in conversation %s", message.pk, conversation.pk)
    return message


def list_messages(conversation_id: Any, user) -> QuerySet:
    conversation = get_conversation(conversation_id, user)
    return conversation.messages.select_related("sender").order_by("created_at", "pk")


def mark_read(conversation_id: Any, user) -> int:
    """Mark every unread message addressed to the user as read."""

    conversation = get_conversation(conversation_id, user)
    return Message.objects.filter(
        conversation=conversation,
        recipient=user,
        read_at__isnull=True,
    ).update(read_at=timezone.now())
