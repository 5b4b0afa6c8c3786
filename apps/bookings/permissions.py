"""Object permissions for bookings."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from .models import Booking


class IsBookingParticipant(permissions.BasePermission):
    """Only the booking's guest or host may see or act on it."""

    message = "Only the guest or the host can access this booking."

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return obj.is_participant(user)
