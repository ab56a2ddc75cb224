from events.domain.models import Event, EventStatus
from events.domain.value_objects import Capacity, EventId, Money

__all__ = [
    "Event",
    "EventStatus",
    "EventId",
    "Money",
    "Capacity",
]
