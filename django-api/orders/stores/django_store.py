"""Django ORM implementation of the OrderStore."""

from contextlib import AbstractContextManager
from datetime import datetime

from django.db import IntegrityError, transaction
from django.utils import timezone

from events.domain import EventId, Money
from orders.domain import Buyer, Order, OrderId, OrderStatus
from orders.domain.errors import OrderNumberCollisionError
from orders.models import Order as OrderModel
from orders.stores.interfaces import OrderStore


def to_domain(row: OrderModel) -> Order:
    user = row.user
    return Order(
        id=OrderId(value=row.id),
        order_number=row.order_number,
        invoice_number=row.invoice_number,
        buyer=Buyer(
            user_id=row.user_id,
            email=user.email,
            name=user.get_full_name() or user.get_username(),
        ),
        event_id=EventId(value=row.event_id),
        event_title=row.event.title,
        quantity=row.quantity,
        unit_price=Money(amount=row.unit_price),
        total_amount=Money(amount=row.total_amount),
        status=OrderStatus(row.status),
        payment_deadline=row.payment_deadline,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoOrderStore(OrderStore):
    def _queryset(self):
        return OrderModel.objects.select_related("user", "event")

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_order(self, order_id: OrderId) -> Order | None:
        row = self._queryset().filter(pk=order_id.value).first()
        return to_domain(row) if row else None

    def create_order(self, order: Order) -> Order:
        try:
            with transaction.atomic():
                OrderModel.objects.create(
                    id=order.id.value,
                    order_number=order.order_number,
                    invoice_number=order.invoice_number,
                    user_id=order.buyer.user_id,
                    event_id=order.event_id.value,
                    quantity=order.quantity,
                    unit_price=order.unit_price.amount,
                    total_amount=order.total_amount.amount,
                    status=order.status.value,
                    payment_deadline=order.payment_deadline,
                )
        except IntegrityError as e:
            taken = OrderModel.objects.filter(order_number=order.order_number).exists() or (
                OrderModel.objects.filter(invoice_number=order.invoice_number).exists()
            )
            if not taken:
                raise
            raise OrderNumberCollisionError() from e
        return self.get_order(order.id)

    def delete_order(self, order_id: OrderId) -> None:
        OrderModel.objects.filter(pk=order_id.value).delete()

    def compare_and_set_status(
        self, order_id: OrderId, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        updated = OrderModel.objects.filter(pk=order_id.value, status=expected.value).update(
            status=new.value, updated_at=timezone.now()
        )
        return bool(updated)

    def list_overdue(self, now: datetime) -> list[Order]:
        rows = self._queryset().filter(
            status=OrderModel.Status.PENDING, payment_deadline__lt=now
        ).order_by("payment_deadline")
        return [to_domain(row) for row in rows]

    def list_orders(self, user_id: int | None, status: OrderStatus | None = None) -> list[Order]:
        rows = self._queryset().order_by("-created_at")
        if user_id is not None:
            rows = rows.filter(user_id=user_id)
        if status is not None:
            rows = rows.filter(status=status.value)
        return [to_domain(row) for row in rows]
