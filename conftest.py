"""Shared pytest fixtures."""

from datetime import timedelta

import pytest


@pytest.fixture
def host(db, django_user_model):
    return django_user_model.objects.create_user(
        email="host@example.com",
        password="StrongPass123",
        user_type="host",
    )


@pytest.fixture
def guest(db, django_user_model):
    return django_user_model.objects.create_user(email="guest@example.com", password="StrongPass123")


@pytest.fixture
def listing(host):
    from apps.properties.models import Property

    return Property.objects.create(
        host=host,
        title="Room near campus",
        address_line1="1 College Road",
        city="Leeds",
        country="UK",
        monthly_price_cents=100000,
        cleaning_fee_cents=5000,
        status=Property.Status.ACTIVE,
    )


@pytest.fixture
def make_booking(listing, guest):
    """Insert a booking row directly, bypassing date validation and the calendar."""
    from django.utils import timezone

    from apps.bookings.models import Booking
    from apps.bookings.pricing import price_for_property

    def _make(start_offset=1, nights=3, **fields):
        check_in = timezone.localdate() + timedelta(days=start_offset)
        price = price_for_property(listing, nights)
        values = {
            "property": listing,
            "guest": guest,
            "host": listing.host,
            "check_in": check_in,
            "check_out": check_in + timedelta(days=nights),
            "nights": nights,
            "subtotal_cents": price.subtotal_cents,
            "service_fee_cents": price.service_fee_cents,
            "cleaning_fee_cents": price.cleaning_fee_cents,
            "total_cents": price.total_cents,
        }
        values.update(fields)
        return Booking.objects.create(**values)

    return _make
