"""Admin registration for ratings."""

from __future__ import annotations

from django.contrib import admin

from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ('booking', 'rater', 'rated', 'rating', 'created_at')
    list_filter = ('rating',)
    search_fields = ('rater__email', 'rated__email', 'comment')
