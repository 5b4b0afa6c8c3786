"""Property API views."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.calendar import unavailable_property_ids
from apps.bookings.serializers import DateWindowSerializer

from .filters import PropertyFilterSet
from .models import Amenity, Property
from .serializers import AmenitySerializer, PropertySerializer, PropertyWriteSerializer
from .services import deactivate_property, ensure_can_host, ensure_is_host


class IsPropertyHostOrReadOnly(permissions.BasePermission):
    """Anyone may read; only the listing's host may change it."""

    def has_object_permission(self, request, view, obj: Property):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.host_id == request.user.id


class PropertyViewSet(viewsets.ModelViewSet):
    """Listings: public browsing, host-side management.

    `check_in`/`check_out` query parameters restrict the list to listings
    with no booked or blocked night in `[check_in, check_out)`.
    """

    queryset = Property.objects.select_related("host").prefetch_related("amenities", "photos")
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsPropertyHostOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = PropertyFilterSet
    search_fields = ["title", "description", "city"]
    ordering_fields = ["monthly_price_cents", "created_at", "bedrooms"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        visible = Q(status=Property.Status.ACTIVE)
        if user.is_authenticated:
            visible |= Q(host=user)
        qs = qs.filter(visible)

        if self.action == "list" and {"check_in", "check_out"} & set(self.request.query_params):
            window = DateWindowSerializer(
                data={
                    "start_date": self.request.query_params.get("check_in"),
                    "end_date": self.request.query_params.get("check_out"),
                },
                context={"require_both": True},
            )
            window.is_valid(raise_exception=True)
            qs = qs.exclude(pk__in=unavailable_property_ids(window.date_range))
        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        ensure_can_host(request.user)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_obj = serializer.save()
        read_serializer = PropertySerializer(property_obj, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        ensure_is_host(instance, request.user)
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(PropertySerializer(serializer.instance, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        deactivate_property(instance, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AmenityViewSet(viewsets.ReadOnlyModelViewSet):
    """Amenity catalogue; managed through the admin."""

    queryset = Amenity.objects.all()
    serializer_class = AmenitySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None
