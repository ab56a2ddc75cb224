from tickets.domain.models import Issuance, Ticket, TicketStatus, TicketValidation

__all__ = ["Issuance", "Ticket", "TicketStatus", "TicketValidation"]
