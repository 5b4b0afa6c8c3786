"""Serializers for chat."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertySummarySerializer
from apps.users.serializers import UserSummarySerializer

from .models import Conversation, Message

MAX_MESSAGE_LENGTH = 5000


class MessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.ReadOnlyField()
    recipient_id = serializers.ReadOnlyField()
    is_read = serializers.ReadOnlyField()

    class Meta:
        model = Message
        fields = ["id", "conversation", "sender_id", "recipient_id", "body", "is_read", "read_at", "created_at"]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    body = serializers.CharField(max_length=MAX_MESSAGE_LENGTH)


class ConversationSerializer(serializers.ModelSerializer):
    """Conversation as seen by one participant."""

    other_participant = serializers.SerializerMethodField()
    property = PropertySummarySerializer(read_only=True)
    booking_id = serializers.ReadOnlyField()
    unread_count = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = [
            "id",
            "other_participant",
            "property",
            "booking_id",
            "last_message_at",
            "last_message_preview",
            "unread_count",
            "created_at",
        ]
        read_only_fields = fields

    def get_other_participant(self, obj: Conversation):  # type: ignore
        other = obj.get_other_user(self.context["request"].user)
        return UserSummarySerializer(other).data if other else None

    def get_unread_count(self, obj: Conversation) -> int:  # type: ignore
        annotated = getattr(obj, "unread_count", None)
        if annotated is not None:
            return annotated
        return obj.messages.filter(recipient=self.context["request"].user, read_at__isnull=True).count()


class ConversationCreateSerializer(serializers.Serializer):
    participant_id = serializers.IntegerField()
    property_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    booking_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    message = serializers.CharField(required=False, allow_blank=True, max_length=MAX_MESSAGE_LENGTH)
