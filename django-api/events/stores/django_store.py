"""Django ORM implementation of the EventStore."""

from functools import partial

from django.db import transaction
from django.db.models import F

from events import cache
from events.domain import Capacity, Event, EventId, EventStatus, Money
from events.models import Event as EventModel
from events.stores.interfaces import EventStore


def to_domain(row: EventModel) -> Event:
    return Event(
        id=EventId(value=row.id),
        title=row.title,
        description=row.description,
        location=row.location,
        price=Money(amount=row.price),
        starts_at=row.starts_at,
        capacity=Capacity(value=row.capacity),
        available_quota=Capacity(value=row.available_quota),
        status=EventStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM.

    Quota changes are single conditional UPDATE statements so concurrent
    bookings for the last seats cannot lose updates.
    """

    def list_events(self) -> list[Event]:
        rows = EventModel.objects.filter(status=EventModel.Status.PUBLISHED).order_by(
            "starts_at"
        )
        return [to_domain(row) for row in rows]

    def get_event(self, event_id: EventId) -> Event | None:
        row = EventModel.objects.filter(pk=event_id.value).first()
        return to_domain(row) if row else None

    def event_exists(self, event_id: EventId) -> bool:
        return EventModel.objects.filter(pk=event_id.value).exists()

    def decrement_quota(self, event_id: EventId, quantity: int) -> bool:
        updated = EventModel.objects.filter(
            pk=event_id.value, available_quota__gte=quantity
        ).update(available_quota=F("available_quota") - quantity)
        if updated:
            transaction.on_commit(partial(cache.invalidate_event, str(event_id)))
        return bool(updated)

    def increment_quota(self, event_id: EventId, quantity: int) -> bool:
        updated = EventModel.objects.filter(pk=event_id.value).update(
            available_quota=F("available_quota") + quantity
        )
        if updated:
            transaction.on_commit(partial(cache.invalidate_event, str(event_id)))
        return bool(updated)
