"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.properties.models import Property
from apps.properties.services import ensure_is_host
from shared.domain.exceptions import NotFoundError

from . import services
from .calendar import block_dates, query_availability, unblock_dates
from .permissions import IsBookingParticipant
from .serializers import (
    BookingCreateSerializer,
    BookingDetailSerializer,
    BookingListQuerySerializer,
    BookingSummarySerializer,
    CalendarBlockSerializer,
    CalendarDaySerializer,
    DateWindowSerializer,
    ReasonSerializer,
)


class BookingViewSet(viewsets.GenericViewSet):
    """Create, read and move bookings through their lifecycle."""

    permission_classes = [permissions.IsAuthenticated, IsBookingParticipant]
    serializer_class = BookingDetailSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "list":
            return BookingSummarySerializer
        if self.action in {"cancel", "decline"}:
            return ReasonSerializer
        return BookingDetailSerializer

    def get_object(self):  # type: ignore
        booking = services.get_booking(self.kwargs["pk"], self.request.user)
        self.check_object_permissions(self.request, booking)
        return booking

    def _detail(self, booking, status_code=status.HTTP_200_OK) -> Response:
        return Response(
            BookingDetailSerializer(booking, context=self.get_serializer_context()).data,
            status=status_code,
        )

    def list(self, request):  # type: ignore
        query = BookingListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        queryset = services.list_bookings(request.user, **query.validated_data)
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = BookingSummarySerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(BookingSummarySerializer(queryset, many=True).data)

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(request.user, **serializer.validated_data)
        return Response(BookingSummarySerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        return self._detail(self.get_object())

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.cancel_booking(pk, request.user, serializer.validated_data["reason"])
        return self._detail(booking)

    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):  # type: ignore
        return self._detail(services.accept_booking(pk, request.user))

    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):  # type: ignore
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.decline_booking(pk, request.user, serializer.validated_data["reason"])
        return self._detail(booking)

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        return self._detail(services.record_payment(pk, request.user))

    @action(detail=True, methods=["get"])
    def invoice(self, request, pk=None):  # type: ignore
        return Response(services.booking_invoice(pk, request.user))


class PropertyCalendarMixin:
    """Resolves the property from the URL."""

    property_lookup_url_kwarg = "property_id"

    def get_property(self) -> Property:
        try:
            return Property.objects.get(pk=self.kwargs[self.property_lookup_url_kwarg])
        except Property.DoesNotExist:
            raise NotFoundError("Property not found.")


class PropertyCalendarView(PropertyCalendarMixin, APIView):
    """Public view of booked and blocked nights, oldest first."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, property_id):  # type: ignore
        property_obj = self.get_property()
        window = DateWindowSerializer(data=request.query_params)
        window.is_valid(raise_exception=True)
        days = query_availability(
            property_obj,
            window.validated_data["start_date"],
            window.validated_data["end_date"],
        )
        return Response(
            {
                "property_id": property_obj.pk,
                "dates": CalendarDaySerializer(days, many=True).data,
            }
        )


class PropertyCalendarBlockView(PropertyCalendarMixin, APIView):
    """Host blocks `[start_date, end_date)`."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = CalendarBlockSerializer

    def post(self, request, property_id):  # type: ignore
        property_obj = self.get_property()
        ensure_is_host(property_obj, request.user)
        serializer = CalendarBlockSerializer(data=request.data, context={"require_both": True})
        serializer.is_valid(raise_exception=True)
        blocked = block_dates(property_obj, serializer.date_range, serializer.validated_data["note"])
        return Response({"blocked": blocked}, status=status.HTTP_201_CREATED)


class PropertyCalendarUnblockView(PropertyCalendarMixin, APIView):
    """Host releases blocked nights in `[start_date, end_date)`."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = DateWindowSerializer

    def post(self, request, property_id):  # type: ignore
        property_obj = self.get_property()
        ensure_is_host(property_obj, request.user)
        serializer = DateWindowSerializer(data=request.data, context={"require_both": True})
        serializer.is_valid(raise_exception=True)
        released = unblock_dates(property_obj, serializer.date_range)
        return Response({"released": released})
