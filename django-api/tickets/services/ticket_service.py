"""Ticket fabrication and ticket reads.

Generation is idempotent per order: once any ticket row exists for an
order, the stored batch is returned as-is. Rows are written before their
PDFs, so a failed PDF leaves a ticket with an empty ``pdf_file`` that
``regenerate`` and ``download`` repair on demand.
"""

import logging
import uuid
from dataclasses import replace
from uuid import UUID

from django.utils import timezone

from common.actors import Actor
from orders.domain import OrderStatus
from tickets.domain import Issuance, Ticket, TicketStatus, TicketValidation
from tickets.domain.errors import (
    InvalidTicketIdError,
    IssuanceNotFoundError,
    TicketAccessDeniedError,
    TicketFabricationError,
    TicketNotFoundError,
    TicketNotValidError,
    TicketNumberCollisionError,
    TicketsNotIssuableError,
)
from tickets.domain.numbering import generate_ticket_number, pdf_filename, qr_filename, seat_label
from tickets.rendering import TicketRenderer
from tickets.stores.interfaces import BlobStore, TicketStore

logger = logging.getLogger(__name__)


def parse_ticket_id(ticket_id: str) -> UUID:
    try:
        return UUID(str(ticket_id))
    except (TypeError, ValueError):
        raise InvalidTicketIdError()


class TicketService:
    """Service for ticket fabrication, retrieval and check-in."""

    def __init__(self, store: TicketStore, blobs: BlobStore, renderer: TicketRenderer) -> None:
        self._store = store
        self._blobs = blobs
        self._renderer = renderer

    # Fabrication

    def generate_for_order(self, order_id: UUID) -> list[Ticket]:
        """Issue one ticket per ordered seat, or return the existing batch.

        Raises:
            IssuanceNotFoundError: The order does not exist.
            TicketNumberCollisionError: A generated number was already taken.
            TicketFabricationError: A QR or PDF artifact could not be produced.
        """
        existing = self._store.list_for_order(order_id)
        if existing:
            logger.info("Tickets already exist for order %s", order_id)
            return existing

        issuance = self._store.get_issuance(order_id)
        if issuance is None:
            raise IssuanceNotFoundError(str(order_id))

        batch = []
        for index in range(issuance.quantity):
            ticket_number = generate_ticket_number()
            batch.append(
                Ticket(
                    id=uuid.uuid4(),
                    order_id=issuance.order_id,
                    event_id=issuance.event_id,
                    ticket_number=ticket_number,
                    sequence=index,
                    seat_label=seat_label(index),
                    attendee_name=issuance.attendee_name,
                    attendee_email=issuance.attendee_email,
                    status=TicketStatus.ACTIVE,
                    qr_code=self._write_qr(ticket_number),
                )
            )

        try:
            saved = self._store.create_tickets(batch)
        except TicketNumberCollisionError:
            # A concurrent generator may have won the (order, sequence) race.
            existing = self._store.list_for_order(order_id)
            if existing:
                return existing
            raise
        logger.info("Saved %s tickets for order %s", len(saved), order_id)

        tickets = []
        failed = 0
        for ticket in saved:
            try:
                tickets.append(self._attach_pdf(ticket, issuance))
            except TicketFabricationError:
                logger.exception("PDF generation failed for ticket %s", ticket.ticket_number)
                tickets.append(ticket)
                failed += 1
        if failed:
            raise TicketFabricationError(
                str(order_id), f"{failed} of {len(saved)} PDFs failed"
            )
        return tickets

    def generate(self, order_id: str, actor: Actor) -> list[Ticket]:
        """Issue (or return) the tickets of a paid order on behalf of its owner.

        Recovers an order whose batch failed while it was being marked paid.

        Raises:
            IssuanceNotFoundError: The order does not exist.
            TicketAccessDeniedError: The actor is neither the owner nor staff.
            TicketsNotIssuableError: The order is not paid.
        """
        issuance = self._load_issuance(order_id, actor)
        if issuance.order_status != OrderStatus.PAID.value:
            raise TicketsNotIssuableError(issuance.order_status)
        return self.generate_for_order(issuance.order_id)

    def regenerate(self, ticket_id: str, actor: Actor) -> Ticket:
        """Rebuild both artifacts of a ticket, overwriting the stored ones."""
        ticket, issuance = self._load_owned(ticket_id, actor)
        qr_code = self._write_qr(ticket.ticket_number)
        ticket = self._attach_pdf(replace(ticket, qr_code=qr_code), issuance)
        logger.info("Regenerated ticket %s", ticket.ticket_number)
        return ticket

    def download(self, ticket_id: str, actor: Actor) -> tuple[str, bytes]:
        """Return (filename, pdf bytes), creating the PDF first if it is missing."""
        ticket, issuance = self._load_owned(ticket_id, actor)
        if not self._blobs.exists(ticket.pdf_file):
            if not self._blobs.exists(ticket.qr_code):
                ticket = replace(ticket, qr_code=self._write_qr(ticket.ticket_number))
            ticket = self._attach_pdf(ticket, issuance)
        return ticket.pdf_file, self._blobs.read(ticket.pdf_file)

    def cancel_for_order(self, order_id: UUID, reason: str) -> int:
        cancelled = self._store.cancel_active_for_order(order_id, reason, timezone.now())
        if cancelled:
            logger.info("Cancelled %s tickets for order %s: %s", cancelled, order_id, reason)
        return cancelled

    # Reads

    def tickets_for_order(self, order_id: UUID) -> list[Ticket]:
        return self._store.list_for_order(order_id)

    def list_for_order(self, order_id: str, actor: Actor) -> list[Ticket]:
        issuance = self._load_issuance(order_id, actor)
        return self._store.list_for_order(issuance.order_id)

    def get_ticket(self, ticket_id: str, actor: Actor) -> Ticket:
        ticket, _ = self._load_owned(ticket_id, actor)
        return ticket

    # Gate operations

    def validate(self, ticket_id: str) -> TicketValidation:
        ticket = self._store.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None:
            return TicketValidation(valid=False, message="Ticket not found")
        if ticket.status is not TicketStatus.ACTIVE:
            return TicketValidation(
                valid=False, message=f"Ticket is {ticket.status.value}", ticket=ticket
            )
        if ticket.checked_in:
            return TicketValidation(
                valid=False, message="Ticket has already been used", ticket=ticket
            )
        return TicketValidation(valid=True, message="Ticket is valid", ticket=ticket)

    def check_in(self, ticket_id: str, actor: Actor) -> Ticket:
        """Admit a ticket holder. Staff only.

        Raises:
            TicketAccessDeniedError: The actor is not staff.
            TicketNotValidError: The ticket is missing, cancelled or already used.
        """
        if not actor.is_staff:
            raise TicketAccessDeniedError()
        validation = self.validate(ticket_id)
        if not validation.valid:
            raise TicketNotValidError(validation.message)

        ticket = validation.ticket
        now = timezone.now()
        checked_in_by = actor.email or str(actor.user_id)
        if not self._store.mark_checked_in(ticket.id, checked_in_by, now):
            raise TicketNotValidError("Ticket has already been used")
        logger.info("Ticket %s checked in by %s", ticket.ticket_number, checked_in_by)
        return replace(
            ticket,
            status=TicketStatus.USED,
            checked_in=True,
            checked_in_at=now,
            checked_in_by=checked_in_by,
        )

    # Internals

    def _load_issuance(self, order_id: str, actor: Actor) -> Issuance:
        try:
            parsed = UUID(str(order_id))
        except (TypeError, ValueError):
            raise IssuanceNotFoundError(str(order_id))
        issuance = self._store.get_issuance(parsed)
        if issuance is None:
            raise IssuanceNotFoundError(str(order_id))
        if not actor.can_access(issuance.owner_id):
            raise TicketAccessDeniedError()
        return issuance

    def _load_owned(self, ticket_id: str, actor: Actor) -> tuple[Ticket, Issuance]:
        ticket = self._store.get_ticket(parse_ticket_id(ticket_id))
        if ticket is None:
            raise TicketNotFoundError(str(ticket_id))
        issuance = self._store.get_issuance(ticket.order_id)
        if issuance is None:
            raise IssuanceNotFoundError(str(ticket.order_id))
        if not actor.can_access(issuance.owner_id):
            raise TicketAccessDeniedError()
        return ticket, issuance

    def _write_qr(self, ticket_number: str) -> str:
        try:
            return self._blobs.write(
                qr_filename(ticket_number), self._renderer.render_qr(ticket_number)
            )
        except Exception as e:
            raise TicketFabricationError(ticket_number, f"QR: {e}") from e

    def _attach_pdf(self, ticket: Ticket, issuance: Issuance) -> Ticket:
        try:
            qr_png = self._blobs.read(ticket.qr_code) if self._blobs.exists(ticket.qr_code) else None
            pdf = self._renderer.render_pdf(ticket, issuance, qr_png)
            pdf_file = self._blobs.write(pdf_filename(ticket.ticket_number), pdf)
        except Exception as e:
            raise TicketFabricationError(ticket.ticket_number, f"PDF: {e}") from e
        self._store.set_artifacts(ticket.id, ticket.qr_code, pdf_file)
        return replace(ticket, pdf_file=pdf_file)
