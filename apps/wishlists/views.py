"""API views for wishlists."""

from __future__ import annotations

from django.db.models import Prefetch  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .models import Wishlist, WishlistItem
from .serializers import WishlistItemCreateSerializer, WishlistItemSerializer, WishlistSerializer


class IsWishlistOwner(permissions.BasePermission):
    message = "You can only access your own wishlists."

    def has_object_permission(self, request, view, obj: Wishlist):  # type: ignore
        return obj.user_id == request.user.id


class WishlistViewSet(viewsets.ModelViewSet):
    """
    The caller's wishlists and the properties saved in them.

    Endpoints:
    - GET/POST /api/v1/wishlists/
    - GET/PATCH/DELETE /api/v1/wishlists/{id}/
    - POST /api/v1/wishlists/{id}/items/ - save a property
    - DELETE /api/v1/wishlists/{id}/items/{property_id}/ - remove it
    - GET /api/v1/wishlists/check/{property_id}/ - which wishlists hold it
    """

    queryset = Wishlist.objects.prefetch_related(
        Prefetch("items", queryset=WishlistItem.objects.select_related("property"))
    )
    serializer_class = WishlistSerializer
    permission_classes = [permissions.IsAuthenticated, IsWishlistOwner]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list":
            # Object actions look up any wishlist so foreign ones give 403, not 404
            return qs.filter(user=self.request.user)
        return qs

    def perform_create(self, serializer):  # type: ignore
        serializer.save(user=self.request.user)

    @action(detail=True, methods=["post"], url_path="items", serializer_class=WishlistItemCreateSerializer)
    def add_item(self, request, pk=None):  # type: ignore
        wishlist = self.get_object()
        serializer = WishlistItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = services.add_property(wishlist, serializer.validated_data["property_id"])
        return Response(WishlistItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"items/(?P<property_id>[0-9]+)")
    def remove_item(self, request, pk=None, property_id=None):  # type: ignore
        services.remove_property(self.get_object(), int(property_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"check/(?P<property_id>[0-9]+)")
    def check(self, request, property_id=None):  # type: ignore
        """Whether the property is saved in any of the caller's wishlists."""
        wishlist_ids = services.wishlists_containing(request.user, int(property_id))
        return Response({"in_wishlist": bool(wishlist_ids), "wishlist_ids": wishlist_ids})
