"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from orders.domain import Order, OrderId, OrderStatus


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Transaction scope shared with the other stores."""
        ...

    @abstractmethod
    def get_order(self, order_id: OrderId) -> Order | None:
        ...

    @abstractmethod
    def create_order(self, order: Order) -> Order:
        """Insert a new order.

        Raises:
            OrderNumberCollisionError: order_number or invoice_number is taken.
        """
        ...

    @abstractmethod
    def delete_order(self, order_id: OrderId) -> None:
        ...

    @abstractmethod
    def compare_and_set_status(
        self, order_id: OrderId, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        """Move the order to ``new`` only if it is still ``expected``."""
        ...

    @abstractmethod
    def list_overdue(self, now: datetime) -> list[Order]:
        """Pending orders whose payment deadline is before ``now``."""
        ...

    @abstractmethod
    def list_orders(self, user_id: int | None, status: OrderStatus | None = None) -> list[Order]:
        """Orders newest first; ``user_id=None`` lists every buyer's orders."""
        ...
