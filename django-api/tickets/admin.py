from django.contrib import admin

from tickets.models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["ticket_number", "seat_label", "order", "event", "status", "checked_in"]
    list_filter = ["status", "checked_in"]
    search_fields = ["ticket_number", "attendee_email", "order__order_number"]
    readonly_fields = ["ticket_number", "qr_code", "pdf_file", "created_at", "updated_at"]
