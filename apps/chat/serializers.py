"""Serializers for chat conversations and messages."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertyShortSerializer
from apps.users.serializers import UserShortSerializer

from .models import Conversation, Message


class SenderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class AttachmentSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=100)
    url = serializers.CharField(max_length=1000)
    name = serializers.CharField(max_length=255)
    size = serializers.IntegerField(min_value=0)


class ConversationSerializer(serializers.ModelSerializer):
    participant1 = UserShortSerializer(read_only=True)
    participant2 = UserShortSerializer(read_only=True)
    property = PropertyShortSerializer(read_only=True, allow_null=True)
    last_message = serializers.SerializerMethodField()
    unread_count = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = [
            "id",
            "participant1",
            "participant2",
            "property",
            "last_message",
            "unread_count",
            "created_at",
            "updated_at",
        ]

    def get_last_message(self, obj: Conversation) -> dict | None:
        created_at = getattr(obj, "last_message_created_at", None)
        if created_at is None:
            return None
        return {
            "content": obj.last_message_content,
            "created_at": serializers.DateTimeField().to_representation(created_at),
            "sender_id": obj.last_message_sender_id,
        }

    def get_unread_count(self, obj: Conversation) -> int:
        return getattr(obj, "unread_count", 0)


class ConversationCreateSerializer(serializers.Serializer):
    participant2_id = serializers.IntegerField()
    property_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class MessageSerializer(serializers.ModelSerializer):
    sender = SenderSerializer(read_only=True)

    class Meta:
        model = Message
        fields = ["id", "conversation_id", "sender", "content", "attachments", "read_at", "created_at"]
        read_only_fields = fields


class MessageQuerySerializer(serializers.Serializer):
    conversation_id = serializers.IntegerField()
    after = serializers.DateTimeField(required=False)


class MessageCreateSerializer(serializers.Serializer):
    conversation_id = serializers.IntegerField()
    content = serializers.CharField(required=False, allow_blank=True, default="")
    attachments = AttachmentSerializer(many=True, required=False)

    def validate(self, attrs):  # type: ignore
        if not attrs.get("content", "").strip() and not attrs.get("attachments"):
            raise serializers.ValidationError("Message must have content or attachments.")
        return attrs
