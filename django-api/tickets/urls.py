from django.urls import path

from tickets.handlers import (
    OrderTicketListView,
    TicketCheckInView,
    TicketDetailView,
    TicketDownloadView,
    TicketRegenerateView,
    TicketValidateView,
)

urlpatterns = [
    path("orders/<str:order_id>/tickets", OrderTicketListView.as_view(), name="order-tickets"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("tickets/<str:ticket_id>/download", TicketDownloadView.as_view(), name="ticket-download"),
    path(
        "tickets/<str:ticket_id>/regenerate",
        TicketRegenerateView.as_view(),
        name="ticket-regenerate",
    ),
    path("tickets/<str:ticket_id>/validate", TicketValidateView.as_view(), name="ticket-validate"),
    path("tickets/<str:ticket_id>/check-in", TicketCheckInView.as_view(), name="ticket-check-in"),
]
