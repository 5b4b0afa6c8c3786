"""Notification services."""

from __future__ import annotations

import logging

from .models import Notification

logger = logging.getLogger(__name__)


def notify(user_id: int, kind: str, title: str, message: str, **payload) -> Notification:
    """Store an in-app notification for a user."""
    notification = Notification.objects.create(
        user_id=user_id,
        kind=kind,
        title=title,
        message=message,
        payload=payload,
    )
    logger.info(f"Notification {notification.pk} ({kind}) created for user {user_id}")
    return notification


def mark_all_read(user) -> int:
    updated = Notification.objects.filter(user=user, is_read=False).update(is_read=True)
    logger.debug(f"Marked {updated} notifications read for user {user.pk}")
    return updated


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()
