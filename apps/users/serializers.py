"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Public card of a user embedded in bookings, reviews and chats."""

    full_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = ["id", "full_name", "first_name", "last_name", "profile_photo_url", "student_verified"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Profile of the authenticated user."""

    phone = serializers.CharField(
        validators=[PHONE_VALIDATOR], required=False, allow_blank=True, allow_null=True
    )

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "user_type",
            "bio",
            "profile_photo_url",
            "email_verified",
            "student_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "email_verified",
            "student_verified",
            "created_at",
            "updated_at",
        ]


class PublicUserSerializer(serializers.ModelSerializer):
    """Profile visible to other users."""

    full_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            "id",
            "full_name",
            "first_name",
            "last_name",
            "user_type",
            "bio",
            "profile_photo_url",
            "student_verified",
            "created_at",
        ]
        read_only_fields = fields
