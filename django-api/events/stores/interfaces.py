"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all published events ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def decrement_quota(self, event_id: EventId, quantity: int) -> bool:
        """Atomically take ``quantity`` seats.

        Returns False, leaving the counter untouched, when fewer than
        ``quantity`` seats remain or the event does not exist.
        """
        ...

    @abstractmethod
    def increment_quota(self, event_id: EventId, quantity: int) -> bool:
        """Atomically give back ``quantity`` seats. False if the event is gone."""
        ...
