"""Wires services to their Django-backed collaborators from settings."""

from datetime import timedelta

from django.conf import settings

from events.services import EventService, InventoryLedger
from events.stores.django_store import DjangoEventStore
from notifications.dispatcher import EmailNotificationDispatcher
from orders.services.order_service import OrderConfig, OrderService
from orders.services.sweeper import ExpirySweeper
from orders.stores.django_store import DjangoOrderStore
from payments.gateway import XenditGateway
from payments.stores.django_store import DjangoPaymentStore
from tickets.services.factory import build_ticket_service


def build_order_config() -> OrderConfig:
    return OrderConfig(
        payment_window=timedelta(seconds=settings.ORDER_PAYMENT_WINDOW_SECONDS),
        currency=settings.PAYMENT_CURRENCY,
        webhook_token=settings.XENDIT_WEBHOOK_TOKEN,
        frontend_url=settings.FRONTEND_URL,
    )


def build_order_service() -> OrderService:
    event_store = DjangoEventStore()
    return OrderService(
        orders=DjangoOrderStore(),
        payments=DjangoPaymentStore(),
        events=EventService(event_store),
        ledger=InventoryLedger(event_store),
        gateway=XenditGateway.from_settings(),
        tickets=build_ticket_service(),
        notifier=EmailNotificationDispatcher(),
        config=build_order_config(),
    )


def build_sweeper() -> ExpirySweeper:
    return ExpirySweeper(build_order_service(), DjangoOrderStore())
