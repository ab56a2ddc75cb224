"""QR and PDF rendering for tickets."""

import base64
import io
from abc import ABC, abstractmethod

import qrcode
from django.template.loader import render_to_string

from tickets.domain import Issuance, Ticket


class TicketRenderer(ABC):
    @abstractmethod
    def render_qr(self, ticket_number: str) -> bytes:
        """PNG bytes of a QR code encoding the ticket number."""
        ...

    @abstractmethod
    def render_pdf(self, ticket: Ticket, issuance: Issuance, qr_png: bytes | None) -> bytes:
        """Printable ticket summarizing event, ticket, seat and attendee."""
        ...


class PdfTicketRenderer(TicketRenderer):
    """Renders the QR with qrcode and the printable ticket with WeasyPrint."""

    template_name = "tickets/ticket.html"

    def render_qr(self, ticket_number: str) -> bytes:
        qr = qrcode.QRCode(box_size=8, border=1)
        qr.add_data(ticket_number)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        image.save(buffer)
        return buffer.getvalue()

    def render_html(self, ticket: Ticket, issuance: Issuance, qr_png: bytes | None) -> str:
        qr_data_uri = (
            "data:image/png;base64," + base64.b64encode(qr_png).decode("ascii")
            if qr_png
            else None
        )
        return render_to_string(
            self.template_name,
            {
                "ticket": ticket,
                "event_title": issuance.event_title,
                "event_location": issuance.event_location or "TBA",
                "event_starts_at": issuance.event_starts_at,
                "attendee_name": ticket.attendee_name or "Guest",
                "qr_data_uri": qr_data_uri,
            },
        )

    def render_pdf(self, ticket: Ticket, issuance: Issuance, qr_png: bytes | None) -> bytes:
        # WeasyPrint loads native libraries at import time
        from weasyprint import HTML

        return HTML(string=self.render_html(ticket, issuance, qr_png)).write_pdf()
