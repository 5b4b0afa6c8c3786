"""
Chat Domain Events
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass
class MessageSent(DomainEvent):
    """
    Event: A message was delivered to a conversation

    Triggers:
    - Notify the recipient
    """
    conversation_id: int
    message_id: int
    sender_id: int
    recipient_id: int
    preview: str
