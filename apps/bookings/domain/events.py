"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A guest requested (or instantly booked) a stay

    Triggers:
    - Notify the host about the new request
    """
    booking_id: int
    property_id: int
    guest_id: int
    host_id: int
    check_in: date
    check_out: date
    total_cents: int
    status: str


@dataclass
class BookingConfirmed(DomainEvent):
    """Event: The host accepted a pending booking"""
    booking_id: int
    property_id: int
    guest_id: int
    host_id: int


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: A booking was cancelled by the guest or declined/cancelled by the host

    Triggers:
    - Notify the other party
    """
    booking_id: int
    property_id: int
    guest_id: int
    host_id: int
    cancelled_by_id: int
    reason: str = ""


@dataclass
class BookingCompleted(DomainEvent):
    """
    Event: The stay is over (check-out date has passed)

    Triggers:
    - Ask both parties for a review
    """
    booking_id: int
    property_id: int
    guest_id: int
    host_id: int
