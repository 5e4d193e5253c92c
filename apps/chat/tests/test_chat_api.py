"""API tests for chat conversations, messages and attachments."""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError, transaction
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.chat.models import Conversation, Message
from apps.chat.services import start_conversation
from apps.properties.models import Property
from apps.users.models import User


class ChatAPITestBase(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(email="owner@example.com", name="Olga", role=User.RoleChoices.OWNER)
        self.buyer = User.objects.create_user(email="buyer@example.com", name="Ben")
        self.stranger = User.objects.create_user(email="stranger@example.com")
        self.property = Property.objects.create(
            owner=self.owner,
            title="Loft downtown",
            property_type=Property.PropertyType.APARTMENT,
            category=Property.Category.BUY,
            price=Decimal("250000.00"),
            address="5 Main St",
            city="Springfield",
        )
        self.conversations_url = reverse("conversation-list")
        self.messages_url = reverse("chat-messages")


class ConversationTests(ChatAPITestBase):
    def test_start_conversation_is_idempotent(self) -> None:
        self.client.force_authenticate(self.buyer)
        payload = {"participant2_id": self.owner.id, "property_id": self.property.id}

        first = self.client.post(self.conversations_url, payload, format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        self.client.force_authenticate(self.owner)
        second = self.client.post(
            self.conversations_url,
            {"participant2_id": self.buyer.id, "property_id": self.property.id},
            format="json",
        )
        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(second.data["conversation"]["id"], first.data["conversation"]["id"])
        self.assertEqual(Conversation.objects.count(), 1)

    def test_property_scope_creates_separate_conversation(self) -> None:
        self.client.force_authenticate(self.buyer)
        self.client.post(self.conversations_url, {"participant2_id": self.owner.id}, format="json")
        response = self.client.post(
            self.conversations_url,
            {"participant2_id": self.owner.id, "property_id": self.property.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Conversation.objects.count(), 2)

    def test_cannot_start_conversation_with_self(self) -> None:
        self.client.force_authenticate(self.buyer)
        response = self.client.post(self.conversations_url, {"participant2_id": self.buyer.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_participant(self) -> None:
        self.client.force_authenticate(self.buyer)
        response = self.client.post(self.conversations_url, {"participant2_id": 99999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_database_rejects_duplicate_pair_in_either_order(self) -> None:
        Conversation.objects.create(participant1=self.buyer, participant2=self.owner)
        Conversation.objects.create(participant1=self.buyer, participant2=self.owner, property=self.property)

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Conversation.objects.create(participant1=self.owner, participant2=self.buyer)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Conversation.objects.create(
                    participant1=self.owner, participant2=self.buyer, property=self.property
                )

    def test_start_returns_conversation_created_concurrently(self) -> None:
        existing = Conversation.objects.create(participant1=self.owner, participant2=self.buyer)
        nothing_found = Conversation.objects.none()

        with mock.patch.object(Conversation.objects, "filter", return_value=nothing_found):
            conversation, created = start_conversation(self.buyer, self.owner.id)

        self.assertFalse(created)
        self.assertEqual(conversation, existing)
        self.assertEqual(Conversation.objects.count(), 1)

    def test_list_orders_by_activity_and_counts_unread(self) -> None:
        older = Conversation.objects.create(participant1=self.buyer, participant2=self.owner)
        newer = Conversation.objects.create(participant1=self.stranger, participant2=self.buyer)
        Message.objects.create(conversation=older, sender=self.owner, content="Still available?")
        Message.objects.create(conversation=older, sender=self.owner, content="Yes it is")
        self.client.force_authenticate(self.buyer)

        response = self.client.get(self.conversations_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [item["id"] for item in response.data["conversations"]]
        self.assertEqual(ids, [older.id, newer.id])
        first = response.data["conversations"][0]
        self.assertEqual(first["unread_count"], 2)
        self.assertEqual(first["last_message"]["content"], "Yes it is")
        self.assertIsNone(response.data["conversations"][1]["last_message"])

    def test_retrieve_requires_participation(self) -> None:
        conversation = Conversation.objects.create(participant1=self.buyer, participant2=self.owner)
        url = reverse("conversation-detail", args=[conversation.id])

        self.client.force_authenticate(self.stranger)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.buyer)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["current_user_id"], self.buyer.id)

        missing = self.client.get(reverse("conversation-detail", args=[99999]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_authentication(self) -> None:
        response = self.client.get(self.conversations_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class MessageTests(ChatAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.conversation = Conversation.objects.create(
            participant1=self.buyer,
            participant2=self.owner,
            property=self.property,
        )

    def test_send_and_read_marks_messages_read(self) -> None:
        self.client.force_authenticate(self.buyer)
        sent = self.client.post(
            self.messages_url,
            {"conversation_id": self.conversation.id, "content": "Hello"},
            format="json",
        )
        self.assertEqual(sent.status_code, status.HTTP_201_CREATED, sent.data)
        self.assertEqual(sent.data["message"]["sender"], {"id": self.buyer.id, "name": "Ben"})

        self.client.force_authenticate(self.owner)
        unread = self.client.get(reverse("conversation-unread-count"))
        self.assertEqual(unread.data["unread_count"], 1)

        response = self.client.get(self.messages_url, {"conversation_id": self.conversation.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m["content"] for m in response.data["messages"]], ["Hello"])
        self.assertIsNotNone(Message.objects.get().read_at)
        self.assertEqual(self.client.get(reverse("conversation-unread-count")).data["unread_count"], 0)

    def test_reading_own_messages_keeps_them_unread(self) -> None:
        Message.objects.create(conversation=self.conversation, sender=self.buyer, content="Ping")
        self.client.force_authenticate(self.buyer)

        self.client.get(self.messages_url, {"conversation_id": self.conversation.id})

        self.assertIsNone(Message.objects.get().read_at)

    def test_after_returns_only_newer_messages(self) -> None:
        first = Message.objects.create(conversation=self.conversation, sender=self.owner, content="one")
        Message.objects.create(conversation=self.conversation, sender=self.owner, content="two")
        self.client.force_authenticate(self.buyer)

        response = self.client.get(
            self.messages_url,
            {"conversation_id": self.conversation.id, "after": first.created_at.isoformat()},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m["content"] for m in response.data["messages"]], ["two"])

    def test_conversation_id_is_required(self) -> None:
        self.client.force_authenticate(self.buyer)
        response = self.client.get(self.messages_url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_empty_message_rejected(self) -> None:
        self.client.force_authenticate(self.buyer)
        response = self.client.post(
            self.messages_url,
            {"conversation_id": self.conversation.id, "content": "   "},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Message.objects.exists())

    def test_attachment_only_message(self) -> None:
        self.client.force_authenticate(self.buyer)
        attachment = {"type": "image/png", "url": "http://testserver/media/x.png", "name": "x.png", "size": 10}
        response = self.client.post(
            self.messages_url,
            {"conversation_id": self.conversation.id, "attachments": [attachment]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"]["attachments"], [attachment])

    def test_outsider_cannot_post(self) -> None:
        self.client.force_authenticate(self.stranger)
        response = self.client.post(
            self.messages_url,
            {"conversation_id": self.conversation.id, "content": "Hi"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AttachmentUploadTests(ChatAPITestBase):
    def setUp(self) -> None:
        super().setUp()
        self.upload_url = reverse("chat-upload")
        self.client.force_authenticate(self.buyer)

    def test_upload_returns_descriptors(self) -> None:
        files = [
            SimpleUploadedFile("plan.pdf", b"%PDF-1.4 test", content_type="application/pdf"),
            SimpleUploadedFile("photo.png", b"\x89PNG data", content_type="image/png"),
        ]

        response = self.client.post(self.upload_url, {"files": files}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        attachments = response.data["attachments"]
        self.assertEqual([a["name"] for a in attachments], ["plan.pdf", "photo.png"])
        self.assertEqual(attachments[0]["type"], "application/pdf")
        self.assertEqual(attachments[1]["size"], len(b"\x89PNG data"))
        self.assertTrue(attachments[0]["url"].startswith("http://testserver/media/chat/attachments/"))

    def test_upload_without_files(self) -> None:
        response = self.client.post(self.upload_url, {}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "No files provided")

    @override_settings(CHAT_ATTACHMENT_MAX_SIZE=4)
    def test_upload_rejects_large_files(self) -> None:
        big = SimpleUploadedFile("big.txt", b"0123456789", content_type="text/plain")
        response = self.client.post(self.upload_url, {"files": [big]}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
