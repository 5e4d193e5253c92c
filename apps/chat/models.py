"""Chat domain models for the Rambo marketplace.

Provides messaging between buyers and owners. A conversation links two
users and may be scoped to the property they are talking about.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models.functions import Coalesce, Greatest, Least
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Conversation(models.Model):
    """
    Represents a conversation between two users.

    At most one conversation exists per pair of users and property scope;
    ``updated_at`` moves forward with every new message so inboxes can be
    sorted by latest activity.
    """

    participant1 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversations_started",
        help_text=_("User who opened the conversation"),
    )
    participant2 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversations_received",
        help_text=_("User who was contacted"),
    )
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
        help_text=_("Property the conversation is about, if any"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Conversation")
        verbose_name_plural = _("Conversations")
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["participant1", "-updated_at"], name="chat_conv_p1_updated_idx"),
            models.Index(fields=["participant2", "-updated_at"], name="chat_conv_p2_updated_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(participant1=models.F("participant2")),
                name="chat_conversation_different_users",
            ),
            models.UniqueConstraint(
                Least("participant1", "participant2"),
                Greatest("participant1", "participant2"),
                Coalesce("property", models.Value(0), output_field=models.BigIntegerField()),
                name="chat_conversation_unique_pair_property",
            ),
        ]

    def __str__(self) -> str:
        context = f" (property: {self.property_id})" if self.property_id else ""
        return f"Conversation between {self.participant1_id} and {self.participant2_id}{context}"

    def is_participant(self, user) -> bool:
        return user.id in (self.participant1_id, self.participant2_id)

    def get_other_user_id(self, user) -> int | None:
        """Id of the other participant in the conversation."""
        if user.id == self.participant1_id:
            return self.participant2_id
        if user.id == self.participant2_id:
            return self.participant1_id
        return None

    def touch(self) -> None:
        self.save(update_fields=["updated_at"])


class Message(models.Model):
    """
    Represents a single message in a conversation.

    A message has text, attachments, or both. Attachments are stored as
    ``{type, url, name, size}`` entries pointing at uploaded files.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    content = models.TextField(blank=True)
    attachments = models.JSONField(default=list, blank=True)
    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("When the recipient read the message"),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = _("Message")
        verbose_name_plural = _("Messages")
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["conversation", "created_at"], name="chat_msg_conv_created_idx"),
            models.Index(fields=["conversation", "read_at"], name="chat_msg_conv_read_idx"),
        ]

    def __str__(self) -> str:
        preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        return f"Message from {self.sender_id} at {self.created_at}: {preview}"

    def save(self, *args, **kwargs):
        """Bump the conversation's activity time when a message is created."""
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            self.conversation.touch()
