"""Celery tasks for the order lifecycle."""

import logging

from celery import shared_task

from orders.services.factory import build_sweeper

logger = logging.getLogger(__name__)


@shared_task(name="orders.expire_overdue_orders")
def expire_overdue_orders() -> dict:
    """Expire pending orders whose payment deadline has passed."""
    result = build_sweeper().sweep()
    return {
        "expired": result.expired,
        "skipped": result.skipped,
        "failed": result.failed,
    }
