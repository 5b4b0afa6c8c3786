"""URL routing for the reviews domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import ReviewViewSet

router = SimpleRouter()
router.register(r"", ReviewViewSet, basename="review")

urlpatterns = [path("", include(router.urls))]
