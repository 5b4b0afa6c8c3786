"""URL routing for wishlists."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import WishlistViewSet

router = SimpleRouter()
router.register(r"", WishlistViewSet, basename="wishlist")

urlpatterns = [path("", include(router.urls))]
