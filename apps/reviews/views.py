"""API views for reviews."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .filters import ReviewFilterSet
from .models import Review
from .serializers import (
    HostResponseSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
)


class ReviewViewSet(viewsets.ModelViewSet):
    """Public list of published reviews; reviewers manage their own."""

    queryset = Review.objects.select_related("property", "reviewer", "reviewee")
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReviewFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReviewCreateSerializer
        if self.action in {"update", "partial_update"}:
            return ReviewUpdateSerializer
        if self.action == "respond":
            return HostResponseSerializer
        return ReviewSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        visible = Q(status=Review.Status.PUBLISHED)
        # Reviewers can still open their own hidden reviews
        if self.action != "list" and self.request.user.is_authenticated:
            visible |= Q(reviewer=self.request.user)
        return qs.filter(visible).order_by("-created_at", "-pk")

    def _read(self, review: Review, status_code=status.HTTP_200_OK) -> Response:
        return Response(ReviewSerializer(review, context=self.get_serializer_context()).data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.create_review(request.user, **serializer.validated_data)
        return self._read(review, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        serializer = ReviewUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        review = services.update_review(kwargs["pk"], request.user, **serializer.validated_data)
        return self._read(review)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_review(kwargs["pk"], request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAuthenticated])
    def respond(self, request, pk=None):  # type: ignore
        """Host answer to a guest's review."""
        serializer = HostResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.respond_to_review(pk, request.user, serializer.validated_data["host_response"])
        return self._read(review)
