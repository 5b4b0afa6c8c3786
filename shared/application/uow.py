"""
Unit of Work Pattern

Wraps a database transaction and holds back domain events until the
transaction has committed.
"""

from typing import List
import logging

from django.db import transaction

from shared.application.message_bus import MessageBus, message_bus as default_bus
from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = Booking.objects.create(...)
            uow.add_event(BookingCreated(aggregate_id=booking.pk, ...))
        # Transaction commits here, events are published after commit

    Nested inside an outer ``transaction.atomic`` block, publication waits
    for the outermost commit. On rollback the events are discarded.
    """

    def __init__(self, bus: MessageBus | None = None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._bus = bus or default_bus

    def __enter__(self):
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._events.append(event)

    @property
    def events(self) -> List[DomainEvent]:
        return self._events.copy()

    def commit(self):
        """Schedule event publishing with transaction.on_commit()"""
        logger.debug(f"Committing transaction with {len(self._events)} events")

        events = self._events.copy()
        self._events.clear()

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Discard events collected so far"""
        if self._events:
            logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def _publish_events(self, events: List[DomainEvent]):
        logger.info(f"Publishing {len(events)} domain events after commit")
        try:
            self._bus.publish_events(events)
        except Exception as e:
            # The data is already committed; delivery failures are only reported
            logger.error(f"Error publishing events: {e}", exc_info=True)
