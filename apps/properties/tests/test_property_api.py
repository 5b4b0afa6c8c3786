"""Tests for property search, details and host management."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, BookingCalendar
from apps.properties.models import Amenity, Property
from apps.users.models import User


class PropertyAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(
            email="host@example.com",
            password="StrongPass123",
            user_type=User.UserType.HOST,
        )
        self.student = User.objects.create_user(email="student@example.com", password="StrongPass123")
        self.amenity_wifi = Amenity.objects.create(name="Wi-Fi")
        self.amenity_desk = Amenity.objects.create(name="Desk", category=Amenity.Category.STUDY)
        self.property = Property.objects.create(
            host=self.host,
            title="Cosy flat near campus",
            description="Two bedrooms, quiet street",
            address_line1="10 Park Lane",
            city="Manchester",
            country="UK",
            property_type=Property.PropertyType.APARTMENT,
            bedrooms=2,
            max_guests=3,
            monthly_price_cents=95000,
            status=Property.Status.ACTIVE,
        )
        self.property.amenities.add(self.amenity_wifi, self.amenity_desk)
        self.draft = Property.objects.create(
            host=self.host,
            title="Unfinished listing",
            address_line1="11 Park Lane",
            city="Manchester",
            country="UK",
            monthly_price_cents=80000,
        )
        self.list_url = reverse("property-list")

    def _payload(self, **extra) -> dict:
        payload = {
            "title": "Studio by the library",
            "address_line1": "5 Library Walk",
            "city": "Bristol",
            "country": "UK",
            "property_type": Property.PropertyType.STUDIO,
            "monthly_price_cents": 70000,
            "cleaning_fee_cents": 3000,
            "amenities": [self.amenity_wifi.id],
            "status": Property.Status.ACTIVE,
        }
        payload.update(extra)
        return payload

    def test_list_properties(self) -> None:
        response = self.client.get(self.list_url, {"city": "manchester"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["title"], "Cosy flat near campus")

    def test_drafts_visible_to_their_host_only(self) -> None:
        detail_url = reverse("property-detail", args=[self.draft.id])
        self.assertEqual(self.client.get(detail_url).status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(self.host)
        self.assertEqual(self.client.get(detail_url).status_code, status.HTTP_200_OK)

    def test_filter_by_amenity(self) -> None:
        response = self.client.get(
            self.list_url,
            {"amenities": f"{self.amenity_wifi.id},{self.amenity_desk.id}"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 1)

    def test_filter_by_price_and_guests(self) -> None:
        response = self.client.get(self.list_url, {"max_price": 90000})
        self.assertEqual(response.data["count"], 0)

        response = self.client.get(self.list_url, {"min_price": 90000, "guests": 3})
        self.assertEqual(response.data["count"], 1)

    def test_property_detail(self) -> None:
        response = self.client.get(reverse("property-detail", args=[self.property.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["id"], self.property.id)
        self.assertEqual(response.data["host"]["id"], self.host.id)
        self.assertEqual(len(response.data["amenities"]), 2)

    def test_date_window_excludes_occupied_listings(self) -> None:
        start = timezone.localdate() + timedelta(days=20)
        BookingCalendar.objects.create(
            property=self.property,
            date=start + timedelta(days=2),
            status=BookingCalendar.Status.BLOCKED,
        )

        overlapping = self.client.get(
            self.list_url,
            {"check_in": str(start), "check_out": str(start + timedelta(days=5))},
        )
        self.assertEqual(overlapping.data["count"], 0)

        # The blocked night is the check-out date, which is not occupied
        adjacent = self.client.get(
            self.list_url,
            {"check_in": str(start), "check_out": str(start + timedelta(days=2))},
        )
        self.assertEqual(adjacent.data["count"], 1)

    def test_date_window_needs_both_dates(self) -> None:
        response = self.client.get(self.list_url, {"check_in": str(timezone.localdate())})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["kind"], "validation")

    def test_host_creates_property(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = Property.objects.get(pk=response.data["id"])
        self.assertEqual(created.host, self.host)
        self.assertIsNotNone(created.published_at)
        self.assertEqual(list(created.amenities.all()), [self.amenity_wifi])

    def test_guest_account_cannot_create_property(self) -> None:
        self.client.force_authenticate(self.student)

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"]["kind"], "forbidden")

    def test_anonymous_cannot_create_property(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_only_host_can_update(self) -> None:
        url = reverse("property-detail", args=[self.property.id])
        self.client.force_authenticate(self.student)
        response = self.client.patch(url, {"title": "Mine now"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.host)
        response = self.client.patch(url, {"monthly_price_cents": 99000}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["monthly_price_cents"], 99000)

    def test_delete_is_soft(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.delete(reverse("property-detail", args=[self.property.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.property.refresh_from_db()
        self.assertEqual(self.property.status, Property.Status.INACTIVE)

    def test_delete_refused_with_confirmed_bookings(self) -> None:
        check_in = timezone.localdate() + timedelta(days=5)
        Booking.objects.create(
            property=self.property,
            guest=self.student,
            host=self.host,
            check_in=check_in,
            check_out=check_in + timedelta(days=3),
            nights=3,
            subtotal_cents=9501,
            service_fee_cents=1140,
            total_cents=10641,
            status=Booking.Status.CONFIRMED,
        )
        self.client.force_authenticate(self.host)

        response = self.client.delete(reverse("property-detail", args=[self.property.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.property.refresh_from_db()
        self.assertEqual(self.property.status, Property.Status.ACTIVE)

    def test_amenity_catalogue(self) -> None:
        response = self.client.get(reverse("amenity-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({item["name"] for item in response.data}, {"Wi-Fi", "Desk"})
