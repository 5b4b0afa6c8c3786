"""Tests for event-driven notifications and the notification API."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.tasks import complete_finished_bookings
from apps.notifications.models import Notification
from apps.properties.models import Property
from apps.users.models import User


class NotificationHandlerTests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(
            email="host-notify@example.com",
            password="StrongPass123",
            user_type=User.UserType.HOST,
        )
        self.guest = User.objects.create_user(email="guest-notify@example.com", password="StrongPass123")
        self.property = Property.objects.create(
            host=self.host,
            title="Riverside studio",
            address_line1="3 Quay Street",
            city="Bristol",
            country="UK",
            monthly_price_cents=90000,
            status=Property.Status.ACTIVE,
        )
        self.check_in = timezone.localdate() + timedelta(days=14)

    def _create_booking(self) -> int:
        self.client.force_authenticate(self.guest)
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                reverse("booking-list"),
                {
                    "property_id": self.property.id,
                    "check_in": str(self.check_in),
                    "check_out": str(self.check_in + timedelta(days=3)),
                },
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data["id"]

    def test_booking_request_notifies_host(self) -> None:
        booking_id = self._create_booking()

        notification = Notification.objects.get(user=self.host)
        self.assertEqual(notification.kind, Notification.Kind.BOOKING_REQUEST)
        self.assertIn("Riverside studio", notification.message)
        self.assertEqual(notification.payload["booking_id"], booking_id)
        self.assertFalse(Notification.objects.filter(user=self.guest).exists())

    def test_confirmation_notifies_guest(self) -> None:
        booking_id = self._create_booking()
        self.client.force_authenticate(self.host)

        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(reverse("booking-accept", args=[booking_id]))

        notification = Notification.objects.get(user=self.guest)
        self.assertEqual(notification.kind, Notification.Kind.BOOKING_CONFIRMED)

    def test_cancellation_notifies_other_party(self) -> None:
        booking_id = self._create_booking()

        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(
                reverse("booking-cancel", args=[booking_id]),
                {"reason": "Exams moved"},
                format="json",
            )

        cancelled = Notification.objects.filter(kind=Notification.Kind.BOOKING_CANCELLED)
        self.assertEqual([n.user_id for n in cancelled], [self.host.id])
        self.assertIn("Exams moved", cancelled[0].message)

    def test_failed_booking_sends_nothing(self) -> None:
        self._create_booking()
        Notification.objects.all().delete()

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                reverse("booking-list"),
                {
                    "property_id": self.property.id,
                    "check_in": str(self.check_in + timedelta(days=1)),
                    "check_out": str(self.check_in + timedelta(days=5)),
                },
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(Notification.objects.exists())

    def test_completed_stay_invites_reviews(self) -> None:
        check_in = timezone.localdate() - timedelta(days=4)
        Booking.objects.create(
            property=self.property,
            guest=self.guest,
            host=self.host,
            check_in=check_in,
            check_out=check_in + timedelta(days=2),
            nights=2,
            subtotal_cents=6000,
            service_fee_cents=720,
            total_cents=6720,
            status=Booking.Status.CONFIRMED,
        )

        with self.captureOnCommitCallbacks(execute=True):
            complete_finished_bookings()

        completed = Notification.objects.filter(kind=Notification.Kind.BOOKING_COMPLETED)
        self.assertEqual({n.user_id for n in completed}, {self.guest.id, self.host.id})

    def test_new_message_notifies_recipient(self) -> None:
        self.client.force_authenticate(self.guest)
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                reverse("conversation-list"),
                {"participant_id": self.host.id, "message": "Hi, is parking included?"},
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        notification = Notification.objects.get(user=self.host)
        self.assertEqual(notification.kind, Notification.Kind.NEW_MESSAGE)
        self.assertEqual(notification.message, "Hi, is parking included?")
        self.assertEqual(notification.payload["conversation_id"], response.data["id"])


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="reader@example.com", password="StrongPass123")
        self.other = User.objects.create_user(email="someone@example.com", password="StrongPass123")
        for index in range(3):
            Notification.objects.create(
                user=self.user,
                kind=Notification.Kind.NEW_MESSAGE,
                title="New message",
                message=f"Message {index}",
            )
        self.foreign = Notification.objects.create(
            user=self.other,
            kind=Notification.Kind.NEW_MESSAGE,
            title="New message",
            message="Not yours",
        )
        self.client.force_authenticate(self.user)

    def test_list_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)
        self.assertEqual(response.data["results"][0]["message"], "Message 2")

    def test_mark_read_and_filter(self) -> None:
        notification = Notification.objects.filter(user=self.user).first()

        response = self.client.post(reverse("notification-mark-read", args=[notification.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_read"])

        unread = self.client.get(reverse("notification-list"), {"is_read": "false"})
        self.assertEqual(unread.data["count"], 2)
        self.assertEqual(self.client.get(reverse("notification-unread-count")).data, {"unread_count": 2})

    def test_mark_all_read(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))

        self.assertEqual(response.data, {"marked_read": 3})
        self.assertEqual(self.client.get(reverse("notification-unread-count")).data, {"unread_count": 0})
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_cannot_touch_other_users_notifications(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.foreign.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
