"""Integration tests for booking API endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.core import mail
from django.db import transaction
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.services import process_payment
from apps.finances.models import Revenue
from apps.notifications.models import Notification
from apps.properties.models import Property
from apps.ratings.models import Rating
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation, payment, completion and cancellation of bookings."""

    def setUp(self) -> None:
        self.customer = User.objects.create_user(email="customer@example.com", name="Casey")
        self.owner = User.objects.create_user(
            email="owner@example.com", name="Olivia", role=User.RoleChoices.OWNER
        )
        self.stranger = User.objects.create_user(email="stranger@example.com")
        self.rental = Property.objects.create(
            owner=self.owner,
            title="Loft downtown",
            property_type=Property.PropertyType.APARTMENT,
            category=Property.Category.RENT,
            price=Decimal("1500.00"),
            address="10 Market St",
            city="Springfield",
            images=["https://img.example.com/loft.jpg"],
        )
        self.house = Property.objects.create(
            owner=self.owner,
            title="Family house",
            property_type=Property.PropertyType.HOUSE,
            category=Property.Category.BUY,
            price=Decimal("420000.00"),
            address="3 Elm St",
            city="Springfield",
        )
        self.client.force_authenticate(self.customer)
        self.list_url = reverse("booking-list")

    def _book(self, property_obj: Property, booking_type: str = "rent") -> Booking:
        return Booking.objects.create(
            property=property_obj,
            customer=self.customer,
            owner=self.owner,
            booking_type=booking_type,
            payment_status=Booking.PaymentStatus.PENDING if booking_type == "rent" else None,
        )

    # --- create -------------------------------------------------------------
    def test_customer_can_book_rental(self) -> None:
        payload = {
            "property_id": self.rental.id,
            "booking_type": "rent",
            "meeting_date": "2026-11-02T10:00:00Z",
            "meeting_location": "Lobby",
        }

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"], "Booking created successfully")
        booking = Booking.objects.get(pk=response.data["booking"]["id"])
        self.assertEqual(booking.status, Booking.Status.PENDING)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.PENDING)
        self.assertEqual(booking.owner, self.owner)
        self.assertEqual(booking.meeting_location, "Lobby")
        self.assertTrue(Notification.objects.filter(user=self.owner).exists())

    def test_purchase_booking_has_no_payment_status(self) -> None:
        response = self.client.post(
            self.list_url, {"property_id": self.house.id, "booking_type": "buy"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIsNone(response.data["booking"]["payment_status"])

    def test_booking_unknown_property(self) -> None:
        response = self.client.post(
            self.list_url, {"property_id": 99999, "booking_type": "rent"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Property not found")

    def test_owner_cannot_book_own_property(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(
            self.list_url, {"property_id": self.rental.id, "booking_type": "rent"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Cannot book your own property")

    def test_booking_type_must_match_category(self) -> None:
        response = self.client.post(
            self.list_url, {"property_id": self.house.id, "booking_type": "rent"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Booking type does not match property category")
        self.assertFalse(Booking.objects.exists())

    def test_unavailable_property_cannot_be_booked(self) -> None:
        self.rental.status = Property.Status.RENTED
        self.rental.save(update_fields=["status"])

        response = self.client.post(
            self.list_url, {"property_id": self.rental.id, "booking_type": "rent"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_anonymous_cannot_book(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(
            self.list_url, {"property_id": self.rental.id, "booking_type": "rent"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # --- list / retrieve ----------------------------------------------------
    def test_list_shows_bookings_of_both_sides_with_own_ratings(self) -> None:
        booking = self._book(self.rental)
        booking.mark_completed()
        Rating.objects.create(booking=booking, rater=self.customer, rated=self.owner, rating=5)
        Rating.objects.create(booking=booking, rater=self.owner, rated=self.customer, rating=3)
        Booking.objects.create(
            property=self.rental, customer=self.stranger, owner=self.owner, booking_type="rent"
        )

        customer_view = self.client.get(self.list_url)
        self.assertEqual(customer_view.status_code, status.HTTP_200_OK)
        self.assertEqual([b["id"] for b in customer_view.data], [booking.id])
        entry = customer_view.data[0]
        self.assertEqual(entry["property"]["title"], "Loft downtown")
        self.assertEqual(entry["owner"]["email"], "owner@example.com")
        self.assertEqual([r["rating"] for r in entry["ratings"]], [5])

        self.client.force_authenticate(self.owner)
        owner_view = self.client.get(self.list_url)
        self.assertEqual(len(owner_view.data), 2)

    def test_stranger_cannot_retrieve_booking(self) -> None:
        booking = self._book(self.rental)
        self.client.force_authenticate(self.stranger)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # --- payment ------------------------------------------------------------
    def test_payment_confirms_booking_and_records_revenue(self) -> None:
        booking = self._book(self.rental)

        response = self.client.post(
            reverse("booking-payment"),
            {"booking_id": booking.id, "amount": "1500.00", "payment_method": "card"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.PAID)
        self.assertEqual(booking.payment_amount, Decimal("1500.00"))
        self.assertTrue(booking.payment_intent_id.startswith("pi_"))
        self.assertIsNotNone(booking.payment_date)
        revenue = Revenue.objects.get(booking=booking)
        self.assertEqual(revenue.owner, self.owner)
        self.assertEqual(revenue.description, "Rent payment for Loft downtown")

    def test_payment_notifies_owner_after_commit(self) -> None:
        booking = self._book(self.rental)
        payload = {"booking_id": booking.id, "amount": "1500.00", "payment_method": "card"}

        with self.captureOnCommitCallbacks() as callbacks:
            response = self.client.post(reverse("booking-payment"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(mail.outbox, [])
        self.assertFalse(Notification.objects.filter(user=self.owner).exists())

        callbacks[0]()

        self.assertEqual([m.subject for m in mail.outbox], ["Payment received for Loft downtown"])
        self.assertTrue(Notification.objects.filter(user=self.owner).exists())

    def test_rolled_back_payment_sends_nothing(self) -> None:
        booking = self._book(self.rental)

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(RuntimeError):
                with transaction.atomic():
                    process_payment(self.customer, booking.id, Decimal("1500.00"), "card")
                    raise RuntimeError("later step failed")

        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])
        booking.refresh_from_db()
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.PENDING)
        self.assertFalse(Revenue.objects.exists())

    def test_payment_by_owner_forbidden(self) -> None:
        booking = self._book(self.rental)
        self.client.force_authenticate(self.owner)

        response = self.client.post(
            reverse("booking-payment"),
            {"booking_id": booking.id, "amount": "1500.00", "payment_method": "card"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_payment_only_for_rentals(self) -> None:
        booking = self._book(self.house, booking_type="buy")

        response = self.client.post(
            reverse("booking-payment"),
            {"booking_id": booking.id, "amount": "100.00", "payment_method": "card"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Payment only available for rent bookings")

    def test_payment_twice_rejected(self) -> None:
        booking = self._book(self.rental)
        payload = {"booking_id": booking.id, "amount": "1500.00", "payment_method": "card"}

        self.client.post(reverse("booking-payment"), payload, format="json")
        second = self.client.post(reverse("booking-payment"), payload, format="json")

        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Revenue.objects.count(), 1)

    def test_payment_unknown_booking(self) -> None:
        response = self.client.post(
            reverse("booking-payment"),
            {"booking_id": 99999, "amount": "10.00", "payment_method": "card"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # --- complete / cancel --------------------------------------------------
    def test_participant_completes_booking(self) -> None:
        booking = self._book(self.rental)
        self.client.force_authenticate(self.owner)

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(reverse("booking-complete", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.COMPLETED)
        self.assertIsNotNone(booking.completed_at)
        self.assertTrue(Notification.objects.filter(user=self.customer).exists())

        again = self.client.post(reverse("booking-complete", args=[booking.id]))
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stranger_cannot_complete(self) -> None:
        booking = self._book(self.rental)
        self.client.force_authenticate(self.stranger)

        response = self.client.post(reverse("booking-complete", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_cancel_paid_rental_refunds(self) -> None:
        booking = self._book(self.rental)
        booking.mark_paid(Decimal("1500.00"), "card", "pi_1")

        response = self.client.post(
            reverse("booking-cancel", args=[booking.id]), {"reason": "Plans changed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.REFUNDED)
        self.assertEqual(booking.cancellation_reason, "Plans changed")

        complete = self.client.post(reverse("booking-complete", args=[booking.id]))
        self.assertEqual(complete.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cancel_paid_rental_reverses_revenue(self) -> None:
        booking = self._book(self.rental)
        self.client.post(
            reverse("booking-payment"),
            {"booking_id": booking.id, "amount": "1500.00", "payment_method": "card"},
            format="json",
        )
        self.assertTrue(Revenue.objects.filter(booking=booking).exists())

        response = self.client.post(reverse("booking-cancel", args=[booking.id]), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(Revenue.objects.filter(booking=booking).exists())
        self.client.force_authenticate(self.owner)
        overview = self.client.get(reverse("analytics-overview"))
        self.assertEqual(overview.data["revenue"], Decimal("0"))
