"""Models for the rating domain.

Defines the ``Rating`` entity: after a booking is completed each party
may rate the other one once, with a score from 1 to 5 and an optional
comment.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Rating(models.Model):
    """A score one booking participant gives the other."""

    booking = models.ForeignKey(
        'bookings.Booking', on_delete=models.CASCADE, related_name='ratings'
    )
    rater = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='ratings_given'
    )
    rated = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='ratings_received'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Score from 1 to 5'),
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['booking', 'rater'], name='rating_once_per_booking'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name='rating_between_1_and_5',
            ),
        ]
        indexes = [
            models.Index(fields=['rated', '-created_at'], name='rating_rated_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Rating by {self.rater_id} for {self.rated_id} (Rating: {self.rating})"
