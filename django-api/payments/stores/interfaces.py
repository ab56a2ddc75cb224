"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from payments.domain import Payment


class PaymentStore(ABC):
    """Interface for payment persistence operations."""

    @abstractmethod
    def get_for_order(self, order_id: UUID) -> Payment | None:
        """Return the order's payment, or None if it has none yet."""
        ...

    @abstractmethod
    def create_payment(self, payment: Payment) -> Payment:
        """Insert a payment.

        Raises:
            PaymentAlreadyExistsError: The order already has a payment.
        """
        ...

    @abstractmethod
    def save_payment(self, payment: Payment) -> Payment:
        """Persist status, paid_at and payment_method of an existing payment."""
        ...
