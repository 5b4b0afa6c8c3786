"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .serializers import PublicUserSerializer, UserSerializer

User = get_user_model()


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """Public profiles plus `me` for the authenticated user.

    - `GET /users/{id}/` returns the public profile
    - `GET|PATCH /users/me/` reads or edits the caller's own profile
    """

    serializer_class = PublicUserSerializer
    queryset = User.objects.filter(is_active=True)
    permission_classes = [permissions.IsAuthenticated]

    def list(self, request, *args, **kwargs):  # type: ignore
        # Only staff may browse the user directory
        if not request.user.is_staff:
            self.permission_denied(request, message="Only staff can list users.")
        return super().list(request, *args, **kwargs)

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        if request.method == "PATCH":
            serializer = UserSerializer(request.user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        return Response(UserSerializer(request.user).data)
