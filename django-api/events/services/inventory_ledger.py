"""Inventory ledger: the only writer of an event's available quota.

The ledger does not cap ``release`` at the original capacity. Callers must
release at most once per successful ``reserve``; the order orchestrator
guarantees that by tying releases to a winning status transition.
"""

import logging

from events.domain import EventId
from events.domain.errors import EventNotFoundError, QuotaExceededError
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class InventoryLedger:
    def __init__(self, store: EventStore) -> None:
        self._store = store

    def reserve(self, event_id: EventId, quantity: int) -> None:
        """Take seats or raise.

        Raises:
            QuotaExceededError: Fewer than ``quantity`` seats remain.
            EventNotFoundError: The event does not exist.
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        if self._store.decrement_quota(event_id, quantity):
            logger.info("Reserved %s seat(s) for event %s", quantity, event_id)
            return
        if not self._store.event_exists(event_id):
            raise EventNotFoundError(str(event_id))
        raise QuotaExceededError(str(event_id), quantity)

    def release(self, event_id: EventId, quantity: int) -> None:
        """Give seats back.

        Raises:
            EventNotFoundError: The event does not exist.
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        if not self._store.increment_quota(event_id, quantity):
            raise EventNotFoundError(str(event_id))
        logger.info("Released %s seat(s) for event %s", quantity, event_id)
