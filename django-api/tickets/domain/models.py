"""Domain models for issued tickets."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class TicketStatus(str, Enum):
    ACTIVE = "active"
    USED = "used"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket."""

    id: UUID
    order_id: UUID
    event_id: UUID
    ticket_number: str
    sequence: int
    seat_label: str
    attendee_name: str
    attendee_email: str
    status: TicketStatus = TicketStatus.ACTIVE
    qr_code: str = ""
    pdf_file: str = ""
    checked_in: bool = False
    checked_in_at: datetime | None = None
    checked_in_by: str = ""
    cancelled_at: datetime | None = None
    notes: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class Issuance:
    """Everything needed to print tickets for one order."""

    order_id: UUID
    event_id: UUID
    owner_id: int
    quantity: int
    attendee_name: str
    attendee_email: str
    event_title: str
    event_location: str
    event_starts_at: datetime
    order_status: str = ""


@dataclass(frozen=True)
class TicketValidation:
    valid: bool
    message: str
    ticket: Ticket | None = None
