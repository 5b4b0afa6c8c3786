"""Integration tests for conversations and messages."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.chat.models import Conversation, Message
from apps.properties.models import Property
from apps.users.models import User


class ChatAPITests(APITestCase):
    def setUp(self) -> None:
        self.student = User.objects.create_user(email="student-chat@example.com", password="StrongPass123")
        self.host = User.objects.create_user(
            email="host-chat@example.com",
            password="StrongPass123",
            user_type=User.UserType.HOST,
        )
        self.outsider = User.objects.create_user(email="outsider-chat@example.com", password="StrongPass123")
        self.property = Property.objects.create(
            host=self.host,
            title="Attic room",
            address_line1="22 High Street",
            city="Oxford",
            country="UK",
            monthly_price_cents=85000,
            status=Property.Status.ACTIVE,
        )
        self.client.force_authenticate(self.student)
        self.list_url = reverse("conversation-list")

    def _start(self, **extra):
        payload = {"participant_id": self.host.id, "property_id": self.property.id}
        payload.update(extra)
        return self.client.post(self.list_url, payload, format="json")

    def _send(self, conversation_id: int, body: str):
        return self.client.post(
            reverse("conversation-messages", args=[conversation_id]),
            {"body": body},
            format="json",
        )

    def test_start_or_get_conversation(self) -> None:
        first = self._start()
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(first.data["other_participant"]["id"], self.host.id)
        self.assertEqual(first.data["property"]["id"], self.property.id)

        self.client.force_authenticate(self.host)
        again = self.client.post(
            self.list_url,
            {"participant_id": self.student.id, "property_id": self.property.id},
            format="json",
        )
        self.assertEqual(again.status_code, status.HTTP_200_OK)
        self.assertEqual(again.data["id"], first.data["id"])
        self.assertEqual(Conversation.objects.count(), 1)

    def test_start_with_first_message(self) -> None:
        response = self._start(message="Is the room still free in September?")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["last_message_preview"], "Is the room still free in September?")
        self.assertEqual(Message.objects.get().recipient, self.host)

    def test_cannot_talk_to_self(self) -> None:
        response = self._start(participant_id=self.student.id)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_participant_or_property(self) -> None:
        self.assertEqual(self._start(participant_id=999999).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self._start(property_id=999999).status_code, status.HTTP_404_NOT_FOUND)

    def test_send_and_read_messages(self) -> None:
        conversation_id = self._start().data["id"]
        self._send(conversation_id, "Hello")
        self._send(conversation_id, "Are pets allowed?")

        self.client.force_authenticate(self.host)
        listing = self.client.get(self.list_url)
        self.assertEqual(listing.data["results"][0]["unread_count"], 2)
        self.assertEqual(listing.data["results"][0]["last_message_preview"], "Are pets allowed?")

        messages = self.client.get(reverse("conversation-messages", args=[conversation_id]))
        self.assertEqual([m["body"] for m in messages.data["results"]], ["Hello", "Are pets allowed?"])
        self.assertTrue(all(m["recipient_id"] == self.host.id for m in messages.data["results"]))

        read = self.client.post(reverse("conversation-read", args=[conversation_id]))
        self.assertEqual(read.data, {"marked_read": 2})
        self.assertEqual(self.client.get(self.list_url).data["results"][0]["unread_count"], 0)

        # The sender's own messages never count as unread for them
        self.client.force_authenticate(self.student)
        self.assertEqual(self.client.get(self.list_url).data["results"][0]["unread_count"], 0)

    def test_empty_and_oversized_messages_rejected(self) -> None:
        conversation_id = self._start().data["id"]

        self.assertEqual(self._send(conversation_id, "   ").status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._send(conversation_id, "x" * 5001).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._send(conversation_id, "x" * 5000).status_code, status.HTTP_201_CREATED)

    def test_outsider_is_forbidden(self) -> None:
        conversation_id = self._start().data["id"]
        self.client.force_authenticate(self.outsider)

        self.assertEqual(
            self.client.get(reverse("conversation-detail", args=[conversation_id])).status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self._send(conversation_id, "Hi").status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(
            self.client.get(reverse("conversation-messages", args=[conversation_id])).status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.get(self.list_url).data["count"], 0)

    def test_conversations_ordered_by_latest_message(self) -> None:
        older = self._start().data["id"]
        newer = self._start(participant_id=self.outsider.id, property_id=None).data["id"]
        self._send(newer, "First")
        self._send(older, "Second")

        response = self.client.get(self.list_url)

        self.assertEqual([c["id"] for c in response.data["results"]], [older, newer])
