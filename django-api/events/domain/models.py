"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from events.domain.value_objects import Capacity, EventId, Money


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Event:
    """Domain representation of a bookable Event."""

    id: EventId
    title: str
    description: str
    location: str
    price: Money
    starts_at: datetime
    capacity: Capacity
    available_quota: Capacity
    status: EventStatus
    created_at: datetime
    updated_at: datetime

    def is_bookable(self, now: datetime) -> bool:
        """Only published events that have not started accept orders."""
        return self.status is EventStatus.PUBLISHED and self.starts_at > now
