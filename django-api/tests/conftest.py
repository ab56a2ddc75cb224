"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from tests.fakes import World, make_actor, make_event


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def event():
    return make_event(capacity=10)


@pytest.fixture
def world(event) -> World:
    return World(event)


@pytest.fixture
def buyer():
    return make_actor(user_id=1)


@pytest.fixture
def stranger():
    return make_actor(user_id=2)


@pytest.fixture
def staff():
    return make_actor(user_id=99, is_staff=True)


@pytest.fixture
def user(db):
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username="buyer", email="buyer@example.com", password="pw", first_name="Ana"
    )


@pytest.fixture
def other_user(db):
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username="other", email="other@example.com", password="pw"
    )


@pytest.fixture
def staff_user(db):
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username="gate", email="gate@example.com", password="pw", is_staff=True
    )


@pytest.fixture
def event_row(db):
    from datetime import timedelta
    from decimal import Decimal

    from django.utils import timezone

    from events.models import Event

    return Event.objects.create(
        title="Jazz Night",
        location="Jakarta",
        price=Decimal("150000.00"),
        starts_at=timezone.now() + timedelta(days=7),
        capacity=10,
        status=Event.Status.PUBLISHED,
    )


@pytest.fixture
def api_services(db, settings, monkeypatch):
    """Django-backed services with a fake gateway and renderer behind every view."""
    from events.services import EventService, InventoryLedger
    from events.stores.django_store import DjangoEventStore
    from notifications.dispatcher import EmailNotificationDispatcher
    from orders.services import OrderService
    from orders.services.factory import build_order_config
    from orders.stores.django_store import DjangoOrderStore
    from payments.stores.django_store import DjangoPaymentStore
    from tests.fakes import WEBHOOK_TOKEN, FakeGateway, FakeRenderer, MemoryBlobStore
    from tickets.services import TicketService
    from tickets.stores.django_store import DjangoTicketStore

    settings.XENDIT_WEBHOOK_TOKEN = WEBHOOK_TOKEN
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    event_store = DjangoEventStore()
    gateway = FakeGateway()
    tickets = TicketService(DjangoTicketStore(), MemoryBlobStore(), FakeRenderer())
    service = OrderService(
        orders=DjangoOrderStore(),
        payments=DjangoPaymentStore(),
        events=EventService(event_store),
        ledger=InventoryLedger(event_store),
        gateway=gateway,
        tickets=tickets,
        notifier=EmailNotificationDispatcher(),
        config=build_order_config(),
    )
    monkeypatch.setattr("orders.handlers.views.get_service", lambda: service)
    monkeypatch.setattr("payments.handlers.views.get_service", lambda: service)
    monkeypatch.setattr("tickets.handlers.views.get_service", lambda: tickets)
    return service, gateway, tickets
