"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from tickets.domain import Issuance, Ticket


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def get_issuance(self, order_id: UUID) -> Issuance | None:
        """Return the printing context for an order, or None if it does not exist."""
        ...

    @abstractmethod
    def list_for_order(self, order_id: UUID) -> list[Ticket]:
        """Return an order's tickets ordered by sequence."""
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: UUID) -> Ticket | None:
        ...

    @abstractmethod
    def create_tickets(self, tickets: list[Ticket]) -> list[Ticket]:
        """Insert a whole batch or nothing.

        Raises:
            TicketNumberCollisionError: A unique constraint was violated.
        """
        ...

    @abstractmethod
    def set_artifacts(self, ticket_id: UUID, qr_code: str, pdf_file: str) -> None:
        ...

    @abstractmethod
    def cancel_active_for_order(self, order_id: UUID, reason: str, at: datetime) -> int:
        """Flip active tickets to cancelled; return how many changed."""
        ...

    @abstractmethod
    def mark_checked_in(self, ticket_id: UUID, checked_in_by: str, at: datetime) -> bool:
        """Check in an active, unused ticket. False if it was not in that state."""
        ...


class BlobStore(ABC):
    """Named-blob storage for generated artifacts."""

    @abstractmethod
    def write(self, name: str, data: bytes) -> str:
        """Store ``data`` under ``name``, replacing any previous blob."""
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        ...

    @abstractmethod
    def read(self, name: str) -> bytes:
        ...
