"""Serializers for wishlists."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertySummarySerializer

from .models import Wishlist, WishlistItem


class WishlistItemSerializer(serializers.ModelSerializer):
    property = PropertySummarySerializer(read_only=True)

    class Meta:
        model = WishlistItem
        fields = ["id", "property", "added_at"]
        read_only_fields = fields


class WishlistSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(source="items.count", read_only=True)
    items = WishlistItemSerializer(many=True, read_only=True)

    class Meta:
        model = Wishlist
        fields = ["id", "name", "description", "item_count", "items", "created_at", "updated_at"]
        read_only_fields = ["id", "item_count", "items", "created_at", "updated_at"]


class WishlistItemCreateSerializer(serializers.Serializer):
    property_id = serializers.IntegerField()
