"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from catalog.domain import City

CITY_CHOICES = [(city.value, city.label) for city in City]


class Event(models.Model):
    """Persistence model for curated events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    description = models.TextField()
    city = models.CharField(max_length=32, choices=CITY_CHOICES)
    ideal_group_size = models.CharField(max_length=100)
    duration_hours = models.DecimalField(max_digits=5, decimal_places=2)
    cost_per_person = models.DecimalField(max_digits=8, decimal_places=2)
    meeting_point = models.CharField(max_length=255)
    transit_tips = models.TextField(blank=True, default="")
    booking_link = models.URLField(max_length=500, blank=True, null=True)
    best_months = models.CharField(max_length=100)
    accessibility_notes = models.TextField(blank=True, default="")
    image_url = models.URLField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["city", "name"], name="catalog_eve_city_8c1a52_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Favorite(models.Model):
    """Persistence model for a user's favorite event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=150)
    event_id = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "event_id"], name="unique_favorite_per_user"
            ),
        ]
        indexes = [
            models.Index(fields=["user_id", "created_at"], name="catalog_fav_user_id_3f9d0e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} - {self.event_id}"
