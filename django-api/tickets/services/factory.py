from tickets.rendering import PdfTicketRenderer
from tickets.services.ticket_service import TicketService
from tickets.stores.django_store import DjangoTicketStore, StorageBlobStore


def build_ticket_service() -> TicketService:
    return TicketService(DjangoTicketStore(), StorageBlobStore(), PdfTicketRenderer())
