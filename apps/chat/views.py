"""API views for chat."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageSerializer,
)


class ConversationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Conversations of the authenticated user.

    Endpoints:
    - GET /api/v1/conversations/ - list with unread counts
    - POST /api/v1/conversations/ - start (or reopen) a conversation
    - GET /api/v1/conversations/{id}/
    - GET/POST /api/v1/conversations/{id}/messages/
    - POST /api/v1/conversations/{id}/read/
    """

    serializer_class = ConversationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return services.list_conversations(self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ConversationCreateSerializer
        if self.action == "messages":
            return MessageSerializer
        return ConversationSerializer

    def create(self, request):  # type: ignore
        serializer = ConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        first_message = data.pop("message", "")
        conversation, created = services.start_conversation(request.user, **data)
        if first_message.strip():
            services.send_message(conversation.pk, request.user, first_message)
            conversation.refresh_from_db()
        return Response(
            ConversationSerializer(conversation, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def retrieve(self, request, pk=None):  # type: ignore
        conversation = services.get_conversation(pk, request.user)
        return Response(ConversationSerializer(conversation, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):  # type: ignore
        """Messages oldest first; POST sends a new one."""
        if request.method == "POST":
            serializer = MessageCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            message = services.send_message(pk, request.user, serializer.validated_data["body"])
            return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

        queryset = services.list_messages(pk, request.user)
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(MessageSerializer(page, many=True).data)
        return Response(MessageSerializer(queryset, many=True).data)

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):  # type: ignore
        return Response({"marked_read": services.mark_read(pk, request.user)})
