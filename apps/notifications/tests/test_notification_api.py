"""API tests for in-app notifications."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications.models import Notification
from apps.notifications.services import notify_user
from apps.users.models import User


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="user@example.com")
        self.other = User.objects.create_user(email="other@example.com")
        self.first = Notification.objects.create(user=self.user, title="New booking", message="Someone booked")
        self.second = Notification.objects.create(user=self.user, title="Payment", message="Paid")
        self.foreign = Notification.objects.create(user=self.other, title="Hidden", message="Not yours")
        self.client.force_authenticate(self.user)

    def test_list_only_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({item["id"] for item in response.data}, {self.first.id, self.second.id})

    def test_mark_read(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.first.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.first.refresh_from_db()
        self.assertTrue(self.first.is_read)

    def test_cannot_mark_someone_elses_notification(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.foreign.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_mark_all_read(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["updated"], 2)
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())
        self.assertFalse(Notification.objects.get(pk=self.foreign.pk).is_read)

    def test_notify_user_creates_notification(self) -> None:
        notify_user(self.other, "Rating received", "You got 5 stars")

        self.assertTrue(Notification.objects.filter(user=self.other, title="Rating received").exists())
