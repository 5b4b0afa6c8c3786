"""URL routing for chat."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import ConversationViewSet

router = SimpleRouter()
router.register(r"", ConversationViewSet, basename="conversation")

urlpatterns = [path("", include(router.urls))]
