"""Integration tests for wishlists."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Property
from apps.users.models import User
from apps.wishlists.models import Wishlist, WishlistItem


class WishlistAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="saver@example.com", password="StrongPass123")
        self.other = User.objects.create_user(email="other@example.com", password="StrongPass123")
        host = User.objects.create_user(
            email="host-wish@example.com",
            password="StrongPass123",
            user_type=User.UserType.HOST,
        )
        self.property = Property.objects.create(
            host=host,
            title="Loft",
            address_line1="12 Mill Road",
            city="Cambridge",
            country="UK",
            monthly_price_cents=110000,
            status=Property.Status.ACTIVE,
        )
        self.wishlist = Wishlist.objects.create(user=self.user, name="Term 1")
        self.client.force_authenticate(self.user)

    def test_create_and_list_own_wishlists(self) -> None:
        Wishlist.objects.create(user=self.other, name="Not mine")

        response = self.client.post(reverse("wishlist-list"), {"name": "Summer"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = self.client.get(reverse("wishlist-list"))
        self.assertEqual({item["name"] for item in response.data["results"]}, {"Term 1", "Summer"})

    def test_add_and_remove_property(self) -> None:
        add_url = reverse("wishlist-add-item", args=[self.wishlist.id])

        response = self.client.post(add_url, {"property_id": self.property.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["property"]["id"], self.property.id)

        detail = self.client.get(reverse("wishlist-detail", args=[self.wishlist.id]))
        self.assertEqual(detail.data["item_count"], 1)

        remove_url = reverse("wishlist-remove-item", args=[self.wishlist.id, self.property.id])
        self.assertEqual(self.client.delete(remove_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(WishlistItem.objects.exists())
        self.assertEqual(self.client.delete(remove_url).status_code, status.HTTP_404_NOT_FOUND)

    def test_duplicate_property_conflicts(self) -> None:
        add_url = reverse("wishlist-add-item", args=[self.wishlist.id])
        self.client.post(add_url, {"property_id": self.property.id}, format="json")

        response = self.client.post(add_url, {"property_id": self.property.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_unknown_property(self) -> None:
        response = self.client.post(
            reverse("wishlist-add-item", args=[self.wishlist.id]),
            {"property_id": 424242},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_other_users_wishlist_is_forbidden(self) -> None:
        self.client.force_authenticate(self.other)

        self.assertEqual(
            self.client.get(reverse("wishlist-detail", args=[self.wishlist.id])).status_code,
            status.HTTP_403_FORBIDDEN,
        )
        response = self.client.post(
            reverse("wishlist-add-item", args=[self.wishlist.id]),
            {"property_id": self.property.id},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(
            self.client.delete(reverse("wishlist-detail", args=[self.wishlist.id])).status_code,
            status.HTTP_403_FORBIDDEN,
        )

    def test_check_property(self) -> None:
        check_url = reverse("wishlist-check", args=[self.property.id])
        self.assertEqual(self.client.get(check_url).data, {"in_wishlist": False, "wishlist_ids": []})

        WishlistItem.objects.create(wishlist=self.wishlist, property=self.property)

        self.assertEqual(
            self.client.get(check_url).data,
            {"in_wishlist": True, "wishlist_ids": [self.wishlist.id]},
        )

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        self.assertEqual(self.client.get(reverse("wishlist-list")).status_code, status.HTTP_401_UNAUTHORIZED)
