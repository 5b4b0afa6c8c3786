"""
Event handlers that turn domain events into notifications.

Registered on the global message bus by ``NotificationsConfig.ready``.
Handlers run after the originating transaction has committed.
"""

import logging

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
)
from apps.bookings.models import Booking
from apps.chat.domain.events import MessageSent
from apps.properties.models import Property
from shared.application.message_bus import message_bus

from .models import Notification
from .services import notify

logger = logging.getLogger(__name__)


def _property_title(property_id: int) -> str:
    title = Property.objects.filter(pk=property_id).values_list("title", flat=True).first()
    return title or f"property #{property_id}"


def on_booking_created(event: BookingCreated):
    """Tell the host about a new request (or an instant booking)"""
    title = _property_title(event.property_id)
    if event.status == Booking.Status.CONFIRMED:
        heading = "New confirmed booking"
    else:
        heading = "New booking request"
    notify(
        event.host_id,
        Notification.Kind.BOOKING_REQUEST,
        heading,
        f"{title}: {event.check_in.isoformat()} to {event.check_out.isoformat()}.",
        booking_id=event.booking_id,
        property_id=event.property_id,
    )


def on_booking_confirmed(event: BookingConfirmed):
    notify(
        event.guest_id,
        Notification.Kind.BOOKING_CONFIRMED,
        "Booking confirmed",
        f"Your stay at {_property_title(event.property_id)} has been confirmed.",
        booking_id=event.booking_id,
        property_id=event.property_id,
    )


def on_booking_cancelled(event: BookingCancelled):
    """Tell the party that did not cancel"""
    recipient_id = event.host_id if event.cancelled_by_id == event.guest_id else event.guest_id
    message = f"The booking for {_property_title(event.property_id)} was cancelled."
    if event.reason:
        message = f"{message} Reason: {event.reason}"
    notify(
        recipient_id,
        Notification.Kind.BOOKING_CANCELLED,
        "Booking cancelled",
        message,
        booking_id=event.booking_id,
        property_id=event.property_id,
    )


def on_booking_completed(event: BookingCompleted):
    """Invite both parties to review each other"""
    title = _property_title(event.property_id)
    for user_id in (event.guest_id, event.host_id):
        notify(
            user_id,
            Notification.Kind.BOOKING_COMPLETED,
            "How was the stay?",
            f"The stay at {title} is over. Leave a review.",
            booking_id=event.booking_id,
            property_id=event.property_id,
        )


def on_message_sent(event: MessageSent):
    notify(
        event.recipient_id,
        Notification.Kind.NEW_MESSAGE,
        "New message",
        event.preview,
        conversation_id=event.conversation_id,
        message_id=event.message_id,
    )


HANDLERS = [
    (BookingCreated, on_booking_created),
    (BookingConfirmed, on_booking_confirmed),
    (BookingCancelled, on_booking_cancelled),
    (BookingCompleted, on_booking_completed),
    (MessageSent, on_message_sent),
]


def register_handlers():
    for event_type, handler in HANDLERS:
        message_bus.register_event_handler(event_type, handler)
    logger.debug(f"Registered {len(HANDLERS)} notification handlers")
