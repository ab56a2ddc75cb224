"""Tests for the expiry sweeper.

Run with: pytest tests/test_sweeper.py -v
"""

from dataclasses import replace
from datetime import timedelta

from django.utils import timezone

from orders.domain import OrderStatus
from orders.services import ExpirySweeper
from payments.domain import PaymentStatus
from tests.fakes import World, make_event


def with_deadline(world: World, order, deadline):
    world.order_store.orders[order.id] = replace(order, payment_deadline=deadline)
    return world.order_store.orders[order.id]


class TestExpirySweeper:
    def test_sweep_expires_only_overdue_orders(self, world, event, buyer):
        """Deadlines {now-1h, now-1m, now+1h}: the first two expire."""
        now = timezone.now()
        orders = [world.service.create_order(buyer, str(event.id), 2).order for _ in range(3)]
        stale = with_deadline(world, orders[0], now - timedelta(hours=1))
        late = with_deadline(world, orders[1], now - timedelta(minutes=1))
        fresh = with_deadline(world, orders[2], now + timedelta(hours=1))
        assert world.quota(event) == 4

        result = ExpirySweeper(world.service, world.order_store).sweep(now)

        assert result.expired == [stale.order_number, late.order_number]
        assert result.scanned == 2
        assert world.order(stale.id).status is OrderStatus.EXPIRED
        assert world.order(late.id).status is OrderStatus.EXPIRED
        assert world.order(fresh.id).status is OrderStatus.PENDING
        assert world.quota(event) == 8

    def test_sweep_expires_payment_and_provider_invoice(self, world, event, buyer):
        now = timezone.now()
        order = world.service.create_order(buyer, str(event.id), 1).order
        with_deadline(world, order, now - timedelta(minutes=5))

        ExpirySweeper(world.service, world.order_store).sweep(now)

        assert world.payment_store.get_for_order(order.id.value).status is PaymentStatus.EXPIRED
        assert world.gateway.expired == ["inv_1"]

    def test_second_sweep_finds_nothing(self, world, event, buyer):
        now = timezone.now()
        order = world.service.create_order(buyer, str(event.id), 1).order
        with_deadline(world, order, now - timedelta(minutes=5))
        sweeper = ExpirySweeper(world.service, world.order_store)

        sweeper.sweep(now)
        result = sweeper.sweep(now)

        assert result.scanned == 0
        assert world.quota(event) == 10

    def test_order_paid_mid_sweep_is_skipped(self, world, event, buyer):
        now = timezone.now()
        order = world.service.create_order(buyer, str(event.id), 3).order
        with_deadline(world, order, now - timedelta(minutes=5))
        world.order_store.before_cas = lambda: world.order_store.set_status(
            order.id, OrderStatus.PAID
        )

        result = ExpirySweeper(world.service, world.order_store).sweep(now)

        assert result.skipped == [order.order_number]
        assert world.order(order.id).status is OrderStatus.PAID
        assert world.quota(event) == 7

    def test_one_failure_does_not_stop_the_sweep(self, buyer):
        now = timezone.now()
        doomed_event, healthy_event = make_event(), make_event()
        world = World(doomed_event, healthy_event)
        doomed = world.service.create_order(buyer, str(doomed_event.id), 1).order
        healthy = world.service.create_order(buyer, str(healthy_event.id), 1).order
        with_deadline(world, doomed, now - timedelta(minutes=10))
        with_deadline(world, healthy, now - timedelta(minutes=5))
        # releasing seats of a vanished event is a critical failure
        del world.event_store.events[doomed_event.id]

        result = ExpirySweeper(world.service, world.order_store).sweep(now)

        assert list(result.failed) == [doomed.order_number]
        assert result.expired == [healthy.order_number]
        assert world.quota(healthy_event) == 10
