"""Tests for booking services: atomicity, events and state rules."""

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.bookings import services
from apps.bookings.calendar import query_availability
from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.bookings.models import Booking, BookingCalendar
from shared.application.message_bus import message_bus
from shared.domain.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


@pytest.fixture
def published():
    events = []

    def record(event):
        events.append(event)

    for event_type in (BookingCreated, BookingCancelled):
        message_bus.register_event_handler(event_type, record)
    yield events
    for event_type in (BookingCreated, BookingCancelled):
        message_bus.unregister_event_handler(event_type, record)


def _dates(offset, nights):
    check_in = timezone.localdate() + timedelta(days=offset)
    return {"check_in": check_in, "check_out": check_in + timedelta(days=nights)}


def test_create_publishes_event_after_commit(listing, guest, published, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 4))

    assert len(callbacks) == 1
    assert [type(event) for event in published] == [BookingCreated]
    event = published[0]
    assert event.booking_id == booking.pk
    assert event.host_id == listing.host_id
    assert event.total_cents == 19932
    assert event.status == Booking.Status.PENDING


def test_event_not_published_before_commit(listing, guest, published, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=False):
        services.create_booking(guest, property_id=listing.pk, **_dates(5, 2))

    assert published == []


def test_conflict_rolls_back_everything(listing, guest, published, django_capture_on_commit_callbacks):
    services.create_booking(guest, property_id=listing.pk, **_dates(5, 4))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ConflictError) as excinfo:
            services.create_booking(guest, property_id=listing.pk, **_dates(7, 4))

    assert callbacks == []
    assert excinfo.value.details["dates"] == [
        (timezone.localdate() + timedelta(days=day)).isoformat() for day in (7, 8)
    ]
    assert Booking.objects.count() == 1
    assert BookingCalendar.objects.count() == 4


def test_missing_fields(guest):
    with pytest.raises(ValidationError) as excinfo:
        services.create_booking(guest, property_id=None, check_in=None, check_out=None)

    assert set(excinfo.value.details) == {"property_id", "check_in", "check_out"}


def test_past_check_in_rejected(listing, guest):
    with pytest.raises(ValidationError) as excinfo:
        services.create_booking(guest, property_id=listing.pk, **_dates(-1, 3))

    assert "check_in" in excinfo.value.details


def test_maximum_stay(listing, guest):
    listing.maximum_stay_months = 1
    listing.save()

    with pytest.raises(ValidationError):
        services.create_booking(guest, property_id=listing.pk, **_dates(1, 31))

    booking = services.create_booking(guest, property_id=listing.pk, **_dates(1, 30))
    assert booking.nights == 30


def test_unknown_property(guest):
    with pytest.raises(NotFoundError):
        services.create_booking(guest, property_id=123456, **_dates(1, 2))


def test_cancel_publishes_event(listing, guest, published, django_capture_on_commit_callbacks):
    booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 2))
    published.clear()

    with django_capture_on_commit_callbacks(execute=True):
        services.cancel_booking(booking.pk, listing.host, "Double listed")

    assert len(published) == 1
    assert published[0].cancelled_by_id == listing.host_id
    assert published[0].reason == "Double listed"


def test_cancel_twice_conflicts(listing, guest):
    booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 2))
    services.cancel_booking(booking.pk, guest)

    with pytest.raises(ConflictError):
        services.cancel_booking(booking.pk, guest)


def test_completed_booking_cannot_be_cancelled(make_booking, guest):
    booking = make_booking(start_offset=-5, nights=2, status=Booking.Status.COMPLETED)

    with pytest.raises(ConflictError):
        services.cancel_booking(booking.pk, guest)


def test_stranger_is_forbidden(make_booking, django_user_model):
    booking = make_booking()
    stranger = django_user_model.objects.create_user(email="nobody@example.com", password="StrongPass123")

    with pytest.raises(ForbiddenError):
        services.get_booking(booking.pk, stranger)
    with pytest.raises(ForbiddenError):
        services.cancel_booking(booking.pk, stranger)

    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING


def test_malformed_booking_id_is_not_found(guest):
    with pytest.raises(NotFoundError):
        services.get_booking("abc", guest)


def test_list_upcoming_only(make_booking, guest):
    make_booking(start_offset=-10, nights=2, status=Booking.Status.COMPLETED)
    upcoming = make_booking(start_offset=3, nights=2)

    assert list(services.list_bookings(guest, "guest", upcoming=True)) == [upcoming]


def test_list_rejects_unknown_status(guest):
    with pytest.raises(ValidationError):
        services.list_bookings(guest, status="archived")


def test_booking_exposes_range_and_activity(listing, guest):
    booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 4))

    assert booking.date_range.nights == 4
    assert booking.is_active

    services.cancel_booking(booking.pk, guest)
    booking.refresh_from_db()
    assert not booking.is_active


def test_deleting_booking_frees_its_nights(listing, guest):
    booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 3))
    assert len(query_availability(listing)) == 3

    booking.delete()

    assert query_availability(listing) == []
    assert not BookingCalendar.objects.filter(property=listing).exists()


def test_deleting_guest_frees_their_nights(listing, guest):
    services.create_booking(guest, property_id=listing.pk, **_dates(5, 3))

    guest.delete()

    assert query_availability(listing) == []


def test_deleting_booking_keeps_host_blocks(listing, guest):
    booking = services.create_booking(guest, property_id=listing.pk, **_dates(5, 3))
    BookingCalendar.objects.create(
        property=listing,
        date=booking.check_out,
        status=BookingCalendar.Status.BLOCKED,
    )

    booking.delete()

    assert query_availability(listing) == [{"date": booking.check_out, "status": "blocked"}]
