"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertySummarySerializer
from apps.users.serializers import UserSummarySerializer
from shared.domain.value_objects import DateRange

from .models import Booking, BookingCalendar


class BookingCreateSerializer(serializers.Serializer):
    """Input of a booking request; business rules live in the service."""

    property_id = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guest_count = serializers.IntegerField(min_value=1, default=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="", max_length=2000)


class BookingSummarySerializer(serializers.ModelSerializer):
    property_id = serializers.ReadOnlyField()
    property_title = serializers.ReadOnlyField(source="property.title")
    guest_id = serializers.ReadOnlyField()
    host_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "property_id",
            "property_title",
            "guest_id",
            "host_id",
            "check_in",
            "check_out",
            "nights",
            "guest_count",
            "total_cents",
            "status",
            "payment_status",
            "created_at",
        ]
        read_only_fields = fields


class BookingDetailSerializer(serializers.ModelSerializer):
    """Booking with property, guest and host cards and the full price breakdown."""

    property = PropertySummarySerializer(read_only=True)
    guest = UserSummarySerializer(read_only=True)
    host = UserSummarySerializer(read_only=True)
    cancelled_by_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "guest",
            "host",
            "check_in",
            "check_out",
            "nights",
            "guest_count",
            "subtotal_cents",
            "service_fee_cents",
            "cleaning_fee_cents",
            "security_deposit_cents",
            "total_cents",
            "status",
            "payment_status",
            "special_requests",
            "confirmed_at",
            "cancelled_by_id",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)


class BookingListQuerySerializer(serializers.Serializer):
    role = serializers.CharField(required=False, default="both")
    status = serializers.CharField(required=False, allow_null=True, default=None)
    property_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    upcoming = serializers.BooleanField(required=False, default=False)


class DateWindowSerializer(serializers.Serializer):
    """A pair of dates from query parameters or a request body.

    With ``require_both`` in the context the window is a half-open range
    and both ends are mandatory; otherwise each bound is optional and
    inclusive.
    """

    start_date = serializers.DateField(required=False, allow_null=True, default=None)
    end_date = serializers.DateField(required=False, allow_null=True, default=None)

    def validate(self, attrs):  # type: ignore
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if self.context.get("require_both"):
            missing = {
                name: ["This field is required."]
                for name in ("start_date", "end_date")
                if attrs.get(name) is None
            }
            if missing:
                raise serializers.ValidationError(missing)
            if start >= end:
                raise serializers.ValidationError({"end_date": ["End date must be after start date."]})
        elif start and end and start > end:
            raise serializers.ValidationError({"end_date": ["End date cannot be before start date."]})
        return attrs

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.validated_data["start_date"], self.validated_data["end_date"])


class CalendarBlockSerializer(DateWindowSerializer):
    note = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=BookingCalendar.Status.choices)
