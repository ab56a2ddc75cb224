from tickets.handlers.views import (
    OrderTicketListView,
    TicketCheckInView,
    TicketDetailView,
    TicketDownloadView,
    TicketRegenerateView,
    TicketValidateView,
)

__all__ = [
    "OrderTicketListView",
    "TicketDetailView",
    "TicketDownloadView",
    "TicketRegenerateView",
    "TicketValidateView",
    "TicketCheckInView",
]
