"""Order domain models.

Quantity and prices are fixed at creation; only ``status`` moves, and only
through orders.domain.state_machine.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Self
from uuid import UUID

from events.domain import EventId, Money
from payments.domain import Payment
from tickets.domain import Ticket


class OrderStatus(str, Enum):
    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_open(self) -> bool:
        return self in (OrderStatus.PENDING, OrderStatus.AWAITING_PAYMENT)


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order. Doubles as the invoice external id."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Buyer:
    user_id: int
    email: str
    name: str


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order."""

    id: OrderId
    order_number: str
    invoice_number: str
    buyer: Buyer
    event_id: EventId
    event_title: str
    quantity: int
    unit_price: Money
    total_amount: Money
    status: OrderStatus
    payment_deadline: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class OrderCreated:
    order: Order
    payment: Payment


@dataclass(frozen=True)
class OrderDetails:
    order: Order
    payment: Payment | None
    tickets: tuple[Ticket, ...] = ()
