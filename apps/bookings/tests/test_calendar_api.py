"""Tests for the public availability calendar and host blocks."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import BookingCalendar
from apps.properties.models import Property
from apps.users.models import User


class PropertyCalendarAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(
            email="host-calendar@example.com",
            password="StrongPass123",
            user_type=User.UserType.HOST,
        )
        self.guest = User.objects.create_user(email="guest-calendar@example.com", password="StrongPass123")
        self.property = Property.objects.create(
            host=self.host,
            title="Shared house room",
            address_line1="4 Elm Street",
            city="York",
            country="UK",
            monthly_price_cents=60000,
            max_guests=1,
            status=Property.Status.ACTIVE,
        )
        self.start = timezone.localdate() + timedelta(days=7)
        self.calendar_url = reverse("property-calendar", args=[self.property.id])
        self.block_url = reverse("property-calendar-block", args=[self.property.id])
        self.unblock_url = reverse("property-calendar-unblock", args=[self.property.id])

    def _day(self, offset: int) -> str:
        return str(self.start + timedelta(days=offset))

    def _book(self, offset: int, nights: int):
        self.client.force_authenticate(self.guest)
        response = self.client.post(
            reverse("booking-list"),
            {
                "property_id": self.property.id,
                "check_in": self._day(offset),
                "check_out": self._day(offset + nights),
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.client.force_authenticate(None)
        return response

    def test_empty_calendar(self) -> None:
        response = self.client.get(self.calendar_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["property_id"], self.property.id)
        self.assertEqual(response.data["dates"], [])

    def test_three_night_booking_shows_three_booked_dates(self) -> None:
        self._book(0, 3)

        response = self.client.get(self.calendar_url)

        self.assertEqual(
            response.data["dates"],
            [{"date": self._day(i), "status": BookingCalendar.Status.BOOKED} for i in range(3)],
        )

    def test_cancelled_booking_frees_calendar(self) -> None:
        booking = self._book(0, 3)
        self.client.force_authenticate(self.guest)
        self.client.post(reverse("booking-cancel", args=[booking.data["id"]]), {}, format="json")
        self.client.force_authenticate(None)

        response = self.client.get(self.calendar_url)

        self.assertEqual(response.data["dates"], [])

    def test_range_filter_is_inclusive(self) -> None:
        self._book(0, 5)

        response = self.client.get(self.calendar_url, {"start_date": self._day(1), "end_date": self._day(3)})

        self.assertEqual([day["date"] for day in response.data["dates"]], [self._day(1), self._day(2), self._day(3)])

    def test_inverted_range_rejected(self) -> None:
        response = self.client.get(self.calendar_url, {"start_date": self._day(3), "end_date": self._day(1)})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_property(self) -> None:
        response = self.client.get(reverse("property-calendar", args=[987654]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_host_blocks_and_unblocks(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.block_url,
            {"start_date": self._day(0), "end_date": self._day(4), "note": "Repainting"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["blocked"], 4)
        statuses = {day["status"] for day in self.client.get(self.calendar_url).data["dates"]}
        self.assertEqual(statuses, {BookingCalendar.Status.BLOCKED})

        response = self.client.post(
            self.unblock_url,
            {"start_date": self._day(1), "end_date": self._day(3)},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["released"], 2)
        remaining = [day["date"] for day in self.client.get(self.calendar_url).data["dates"]]
        self.assertEqual(remaining, [self._day(0), self._day(3)])

    def test_block_over_booking_conflicts(self) -> None:
        self._book(2, 2)
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.block_url,
            {"start_date": self._day(0), "end_date": self._day(4)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(BookingCalendar.objects.filter(status=BookingCalendar.Status.BLOCKED).count(), 0)

    def test_unblock_keeps_booked_nights(self) -> None:
        self._book(0, 2)
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.unblock_url,
            {"start_date": self._day(0), "end_date": self._day(2)},
            format="json",
        )

        self.assertEqual(response.data["released"], 0)
        self.assertEqual(BookingCalendar.objects.filter(status=BookingCalendar.Status.BOOKED).count(), 2)

    def test_only_host_can_block(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            self.block_url,
            {"start_date": self._day(0), "end_date": self._day(2)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_block_requires_both_dates(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(self.block_url, {"start_date": self._day(0)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data["error"]["details"])
