"""API views for chat."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.parsers import FormParser, MultiPartParser  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageQuerySerializer,
    MessageSerializer,
)
from .services import (
    ChatError,
    conversations_for,
    get_conversation_for,
    read_messages,
    send_message,
    start_conversation,
    store_attachments,
    unread_total,
)


def _error(exc: ChatError) -> Response:
    return Response({"detail": str(exc)}, status=exc.status_code)


class ConversationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Conversations of the current user, newest activity first."""

    serializer_class = ConversationSerializer
    lookup_value_regex = r"\d+"
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return conversations_for(self.request.user)

    def list(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"conversations": serializer.data})

    def create(self, request):  # type: ignore
        serializer = ConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            conversation, created = start_conversation(
                request.user,
                serializer.validated_data["participant2_id"],
                serializer.validated_data["property_id"],
            )
        except ChatError as exc:
            return _error(exc)
        conversation = self.get_queryset().get(pk=conversation.pk)
        return Response(
            {"conversation": ConversationSerializer(conversation).data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def retrieve(self, request, pk=None):  # type: ignore
        try:
            conversation = get_conversation_for(request.user, pk)
        except ChatError as exc:
            return _error(exc)
        conversation = self.get_queryset().get(pk=conversation.pk)
        return Response(
            {
                "conversation": ConversationSerializer(conversation).data,
                "current_user_id": request.user.id,
            }
        )

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):  # type: ignore
        return Response({"unread_count": unread_total(request.user)})


class MessageView(APIView):
    """List messages of a conversation (with polling) and send new ones."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        query = MessageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        try:
            conversation = get_conversation_for(request.user, query.validated_data["conversation_id"])
        except ChatError as exc:
            return _error(exc)
        messages = read_messages(request.user, conversation, query.validated_data.get("after"))
        return Response({"messages": MessageSerializer(messages, many=True).data})

    def post(self, request):  # type: ignore
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            conversation = get_conversation_for(request.user, serializer.validated_data["conversation_id"])
            message = send_message(
                request.user,
                conversation,
                serializer.validated_data.get("content", ""),
                serializer.validated_data.get("attachments"),
            )
        except ChatError as exc:
            return _error(exc)
        return Response({"message": MessageSerializer(message).data}, status=status.HTTP_201_CREATED)


class AttachmentUploadView(APIView):
    """Store chat attachments and return their descriptors."""

    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):  # type: ignore
        try:
            attachments = store_attachments(request.FILES.getlist("files"))
        except ChatError as exc:
            return _error(exc)
        for attachment in attachments:
            attachment["url"] = request.build_absolute_uri(attachment["url"])
        return Response({"attachments": attachments}, status=status.HTTP_200_OK)
