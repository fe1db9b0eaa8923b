"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.CharField(max_length=200, editable=False)
    description = models.TextField()
    overview = models.TextField()
    image = models.CharField(max_length=500)
    image_asset = models.CharField(max_length=500, blank=True, default="")
    venue = models.CharField(max_length=200)
    location = models.CharField(max_length=200)
    date = models.DateField()
    time = models.TimeField()
    mode = models.CharField(max_length=50)
    audience = models.CharField(max_length=200)
    agenda = models.JSONField(default=list)
    organizer = models.CharField(max_length=200)
    tags = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="event_slug_unique"),
            models.UniqueConstraint(
                fields=["title", "date", "time", "venue"],
                name="event_schedule_unique",
            ),
        ]
        indexes = [
            models.Index(fields=["-created_at"], name="event_created_idx"),
            models.Index(fields=["date", "time"], name="event_schedule_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="bookings")
    email = models.EmailField(max_length=254)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "email"], name="booking_event_email_unique"),
        ]
        indexes = [
            models.Index(fields=["email"], name="booking_email_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} - {self.event.title}"
