"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for bookable events."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        CANCELLED = "cancelled", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    starts_at = models.DateTimeField()
    capacity = models.PositiveIntegerField()
    available_quota = models.PositiveIntegerField(blank=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.DRAFT, db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_even_created_6b1f0c_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_quota__gte=0),
                name="event_available_quota_non_negative",
            ),
        ]

    def save(self, *args, **kwargs):
        if self._state.adding and self.available_quota is None:
            self.available_quota = self.capacity
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.title
