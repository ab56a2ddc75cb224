"""Expiry sweeper: expires pending orders past their payment deadline."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from django.utils import timezone

from orders.domain import OrderStatus
from orders.domain.errors import InvalidOrderTransitionError
from orders.services.order_service import OrderService
from orders.stores.interfaces import OrderStore

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    expired: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def scanned(self) -> int:
        return len(self.expired) + len(self.skipped) + len(self.failed)


class ExpirySweeper:
    """Drives overdue orders through the same path as an EXPIRED webhook.

    One failing order never stops the sweep of the rest.
    """

    def __init__(self, service: OrderService, store: OrderStore) -> None:
        self._service = service
        self._store = store

    def sweep(self, now: datetime | None = None) -> SweepResult:
        now = now or timezone.now()
        result = SweepResult()
        overdue = self._store.list_overdue(now)
        logger.info("Expiry sweep found %s overdue order(s)", len(overdue))

        for order in overdue:
            try:
                updated = self._service.expire_overdue_order(order)
            except InvalidOrderTransitionError as e:
                # Paid or cancelled between the scan and the transition.
                logger.info("Skipping order %s: %s", order.order_number, e.message)
                result.skipped.append(order.order_number)
                continue
            except Exception as e:
                logger.exception("Error expiring order %s", order.order_number)
                result.failed[order.order_number] = str(e)
                continue
            if updated.status is OrderStatus.EXPIRED:
                result.expired.append(order.order_number)
            else:
                result.skipped.append(order.order_number)

        logger.info(
            "Expiry sweep done: %s expired, %s skipped, %s failed",
            len(result.expired),
            len(result.skipped),
            len(result.failed),
        )
        return result
