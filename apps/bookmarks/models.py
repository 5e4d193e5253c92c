"""Model definition for bookmarks.

The ``Bookmark`` model represents a property a user saved for later.
Users toggle bookmarks on and off from listing cards; duplicates are
prevented via a unique constraint.
"""

from __future__ import annotations

from django.db import models  # type: ignore


class Bookmark(models.Model):
    """A user's saved property."""

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='bookmarks'
    )
    property = models.ForeignKey(
        'properties.Property', on_delete=models.CASCADE, related_name='bookmarked_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'property'], name='bookmark_unique_user_property'),
        ]

    def __str__(self) -> str:
        return f"Bookmark property {self.property_id} by user {self.user_id}"
