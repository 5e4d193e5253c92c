"""Conversation, message and attachment services for chat."""

from __future__ import annotations

import logging
import mimetypes
import posixpath
import uuid
from datetime import datetime
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.core.files.storage import default_storage  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Count, OuterRef, Q, QuerySet, Subquery  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.text import get_valid_filename  # type: ignore

from apps.properties.models import Property

from .models import Conversation, Message

logger = logging.getLogger(__name__)


class ChatError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


# ============================================================================
# CONVERSATIONS
# ============================================================================

def conversations_for(user) -> QuerySet:
    """Conversations of ``user`` with last message and unread count annotated."""
    last_message = Message.objects.filter(conversation=OuterRef("pk")).order_by("-created_at", "-id")
    return (
        Conversation.objects.filter(Q(participant1=user) | Q(participant2=user))
        .select_related("participant1", "participant2", "property")
        .annotate(
            unread_count=Count(
                "messages",
                filter=Q(messages__read_at__isnull=True) & ~Q(messages__sender=user),
            ),
            last_message_content=Subquery(last_message.values("content")[:1]),
            last_message_created_at=Subquery(last_message.values("created_at")[:1]),
            last_message_sender_id=Subquery(last_message.values("sender_id")[:1]),
        )
        .order_by("-updated_at")
    )


def get_conversation_for(user, conversation_id) -> Conversation:
    """Load a conversation the user takes part in.

    Raises:
        ChatError: 404 when missing, 403 when the user is not a participant.
    """
    conversation = (
        Conversation.objects.select_related("participant1", "participant2", "property")
        .filter(pk=conversation_id)
        .first()
    )
    if conversation is None:
        raise ChatError("Conversation not found", status_code=404)
    if not conversation.is_participant(user):
        raise ChatError("You are not a participant of this conversation", status_code=403)
    return conversation


@transaction.atomic
def start_conversation(user, participant2_id: int, property_id: int | None = None) -> tuple[Conversation, bool]:
    """Return the conversation between ``user`` and another user, creating it if needed.

    Either participant order matches, and the property scope must be equal
    (no property matches no property).
    """
    if participant2_id == user.id:
        raise ChatError("Cannot start a conversation with yourself")
    User = get_user_model()
    if not User.objects.filter(pk=participant2_id).exists():
        raise ChatError("User not found", status_code=404)
    if property_id is not None and not Property.objects.filter(pk=property_id).exists():
        raise ChatError("Property not found", status_code=404)

    pair = Q(participant1=user, participant2_id=participant2_id) | Q(
        participant1_id=participant2_id, participant2=user
    )
    existing = Conversation.objects.filter(pair, property_id=property_id).first()
    if existing is not None:
        return existing, False

    try:
        with transaction.atomic():
            conversation = Conversation.objects.create(
                participant1=user,
                participant2_id=participant2_id,
                property_id=property_id,
            )
    except IntegrityError:
        # Another request created the same conversation first
        return Conversation.objects.get(pair, property_id=property_id), False
    logger.info(f"Conversation {conversation.id} started by {user.id} with {participant2_id}")
    return conversation, True


def unread_total(user) -> int:
    return (
        Message.objects.filter(
            Q(conversation__participant1=user) | Q(conversation__participant2=user),
            read_at__isnull=True,
        )
        .exclude(sender=user)
        .count()
    )


# ============================================================================
# MESSAGES
# ============================================================================

def read_messages(user, conversation: Conversation, after: datetime | None = None) -> list[Message]:
    """Messages in chronological order; the other party's unread ones become read."""
    messages = conversation.messages.select_related("sender")
    if after is not None:
        messages = messages.filter(created_at__gt=after)
    result = list(messages.order_by("created_at", "id"))

    conversation.messages.filter(read_at__isnull=True).exclude(sender=user).update(read_at=timezone.now())
    return result


def send_message(user, conversation: Conversation, content: str = "", attachments: list | None = None) -> Message:
    if not content and not attachments:
        raise ChatError("Message must have content or attachments")
    message = Message.objects.create(
        conversation=conversation,
        sender=user,
        content=content or "",
        attachments=attachments or [],
    )
    return message


# ============================================================================
# ATTACHMENTS
# ============================================================================

def store_attachments(files) -> list[dict[str, Any]]:
    """Save uploaded files to the default storage and describe them.

    Raises:
        ChatError: no files, too many files, or a file over the size limit.
    """
    if not files:
        raise ChatError("No files provided")
    if len(files) > settings.CHAT_ATTACHMENT_MAX_FILES:
        raise ChatError(f"Too many files (max {settings.CHAT_ATTACHMENT_MAX_FILES})")
    for upload in files:
        if upload.size > settings.CHAT_ATTACHMENT_MAX_SIZE:
            raise ChatError(f"File '{upload.name}' is too large")

    attachments = []
    for upload in files:
        name = get_valid_filename(posixpath.basename(upload.name) or "file")
        path = default_storage.save(
            posixpath.join(settings.CHAT_ATTACHMENT_DIR, uuid.uuid4().hex, name), upload
        )
        content_type = getattr(upload, "content_type", None) or mimetypes.guess_type(name)[0]
        attachments.append(
            {
                "type": content_type or "application/octet-stream",
                "url": default_storage.url(path),
                "name": upload.name,
                "size": upload.size,
            }
        )
    logger.info(f"Stored {len(attachments)} chat attachments")
    return attachments
