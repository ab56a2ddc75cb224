"""Django ORM and storage implementations of the ticket stores."""

from datetime import datetime
from uuid import UUID

from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage
from django.db import IntegrityError, transaction
from django.utils import timezone

from orders.models import Order as OrderModel
from tickets.domain import Issuance, Ticket, TicketStatus
from tickets.domain.errors import TicketNumberCollisionError
from tickets.models import Ticket as TicketModel
from tickets.stores.interfaces import BlobStore, TicketStore


def to_domain(row: TicketModel) -> Ticket:
    return Ticket(
        id=row.id,
        order_id=row.order_id,
        event_id=row.event_id,
        ticket_number=row.ticket_number,
        sequence=row.sequence,
        seat_label=row.seat_label,
        attendee_name=row.attendee_name,
        attendee_email=row.attendee_email,
        status=TicketStatus(row.status),
        qr_code=row.qr_code,
        pdf_file=row.pdf_file,
        checked_in=row.checked_in,
        checked_in_at=row.checked_in_at,
        checked_in_by=row.checked_in_by,
        cancelled_at=row.cancelled_at,
        notes=row.notes,
        created_at=row.created_at,
    )


class DjangoTicketStore(TicketStore):
    def get_issuance(self, order_id: UUID) -> Issuance | None:
        order = OrderModel.objects.select_related("user", "event").filter(pk=order_id).first()
        if order is None:
            return None
        user = order.user
        return Issuance(
            order_id=order.id,
            event_id=order.event_id,
            owner_id=order.user_id,
            quantity=order.quantity,
            attendee_name=user.get_full_name() or user.get_username(),
            attendee_email=user.email,
            event_title=order.event.title,
            event_location=order.event.location,
            event_starts_at=order.event.starts_at,
            order_status=order.status,
        )

    def list_for_order(self, order_id: UUID) -> list[Ticket]:
        rows = TicketModel.objects.filter(order_id=order_id).order_by("sequence")
        return [to_domain(row) for row in rows]

    def get_ticket(self, ticket_id: UUID) -> Ticket | None:
        row = TicketModel.objects.filter(pk=ticket_id).first()
        return to_domain(row) if row else None

    def create_tickets(self, tickets: list[Ticket]) -> list[Ticket]:
        rows = [
            TicketModel(
                id=ticket.id,
                order_id=ticket.order_id,
                event_id=ticket.event_id,
                ticket_number=ticket.ticket_number,
                sequence=ticket.sequence,
                seat_label=ticket.seat_label,
                attendee_name=ticket.attendee_name,
                attendee_email=ticket.attendee_email,
                status=ticket.status.value,
                qr_code=ticket.qr_code,
                pdf_file=ticket.pdf_file,
            )
            for ticket in tickets
        ]
        try:
            with transaction.atomic():
                TicketModel.objects.bulk_create(rows)
        except IntegrityError as e:
            order_id = str(tickets[0].order_id) if tickets else ""
            raise TicketNumberCollisionError(order_id) from e
        return self.list_for_order(tickets[0].order_id) if tickets else []

    def set_artifacts(self, ticket_id: UUID, qr_code: str, pdf_file: str) -> None:
        TicketModel.objects.filter(pk=ticket_id).update(
            qr_code=qr_code, pdf_file=pdf_file, updated_at=timezone.now()
        )

    def cancel_active_for_order(self, order_id: UUID, reason: str, at: datetime) -> int:
        return TicketModel.objects.filter(
            order_id=order_id, status=TicketModel.Status.ACTIVE
        ).update(
            status=TicketModel.Status.CANCELLED,
            cancelled_at=at,
            notes=reason,
            updated_at=timezone.now(),
        )

    def mark_checked_in(self, ticket_id: UUID, checked_in_by: str, at: datetime) -> bool:
        updated = TicketModel.objects.filter(
            pk=ticket_id, status=TicketModel.Status.ACTIVE, checked_in=False
        ).update(
            status=TicketModel.Status.USED,
            checked_in=True,
            checked_in_at=at,
            checked_in_by=checked_in_by,
            updated_at=timezone.now(),
        )
        return bool(updated)


class StorageBlobStore(BlobStore):
    """Blob store over a Django Storage backend (MEDIA_ROOT by default)."""

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage or default_storage

    def write(self, name: str, data: bytes) -> str:
        if self._storage.exists(name):
            self._storage.delete(name)
        return self._storage.save(name, ContentFile(data))

    def exists(self, name: str) -> bool:
        return bool(name) and self._storage.exists(name)

    def read(self, name: str) -> bytes:
        with self._storage.open(name, "rb") as handle:
            return handle.read()
