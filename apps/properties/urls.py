"""URL routing for the properties domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from apps.bookings.views import (
    PropertyCalendarBlockView,
    PropertyCalendarUnblockView,
    PropertyCalendarView,
)

from .views import AmenityViewSet, PropertyViewSet

router = SimpleRouter()
router.register(r"", PropertyViewSet, basename="property")

urlpatterns = [
    path("amenities/", AmenityViewSet.as_view({"get": "list"}), name="amenity-list"),
    # Booking calendar
    path(
        "<int:property_id>/calendar/",
        PropertyCalendarView.as_view(),
        name="property-calendar",
    ),
    path(
        "<int:property_id>/calendar/block/",
        PropertyCalendarBlockView.as_view(),
        name="property-calendar-block",
    ),
    path(
        "<int:property_id>/calendar/unblock/",
        PropertyCalendarUnblockView.as_view(),
        name="property-calendar-unblock",
    ),
    path("", include(router.urls)),
]
