"""Rating submission rules."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count  # type: ignore

from apps.bookings.models import Booking
from apps.notifications.services import notify_rating_received

from .models import Rating

logger = logging.getLogger(__name__)


class RatingError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


def submit_rating(rater, booking_id: int, rated_id: int, rating: int, comment: str = "") -> Rating:
    """Record ``rater``'s score for the other party of a completed booking.

    Raises:
        RatingError: the booking is missing or not completed, the caller is
            not a participant, the rated user is not the other participant,
            or the caller already rated this booking.
    """
    booking = Booking.objects.filter(pk=booking_id).first()
    if booking is None:
        raise RatingError("Booking not found", status_code=404)
    if booking.status != Booking.Status.COMPLETED:
        raise RatingError("Can only rate completed bookings")
    if not booking.is_participant(rater):
        raise RatingError("You are not a participant of this booking", status_code=403)
    if rated_id not in (booking.customer_id, booking.owner_id):
        raise RatingError("Invalid user to rate")
    if rated_id == rater.id:
        raise RatingError("Cannot rate yourself")
    if Rating.objects.filter(booking=booking, rater=rater).exists():
        raise RatingError("Rating already submitted")

    try:
        with transaction.atomic():
            created = Rating.objects.create(
                booking=booking,
                rater=rater,
                rated_id=rated_id,
                rating=rating,
                comment=comment,
            )
    except IntegrityError as exc:
        raise RatingError("Rating already submitted") from exc

    logger.info(f"Rating {created.id} submitted by {rater.id} for {rated_id} on booking {booking.id}")
    transaction.on_commit(lambda: notify_rating_received(created))
    return created


def rating_summary(user_id: int) -> dict:
    """Average score and count of ratings a user received."""
    summary = Rating.objects.filter(rated_id=user_id).aggregate(average=Avg("rating"), count=Count("id"))
    average = summary["average"]
    return {
        "average": round(float(average), 2) if average is not None else None,
        "count": summary["count"],
    }
