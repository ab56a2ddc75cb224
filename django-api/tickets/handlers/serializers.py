"""Serializers for ticket responses."""

from rest_framework import serializers


class TicketSerializer(serializers.Serializer):
    id = serializers.SerializerMethodField()
    order_id = serializers.SerializerMethodField()
    ticket_number = serializers.CharField()
    seat_label = serializers.CharField()
    attendee_name = serializers.CharField()
    attendee_email = serializers.CharField()
    status = serializers.SerializerMethodField()
    checked_in = serializers.BooleanField()
    checked_in_at = serializers.DateTimeField()
    has_pdf = serializers.SerializerMethodField()

    def get_id(self, ticket) -> str:
        return str(ticket.id)

    def get_order_id(self, ticket) -> str:
        return str(ticket.order_id)

    def get_status(self, ticket) -> str:
        return ticket.status.value

    def get_has_pdf(self, ticket) -> bool:
        return bool(ticket.pdf_file)


class TicketValidationSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    message = serializers.CharField()
    ticket = serializers.SerializerMethodField()

    def get_ticket(self, validation) -> dict | None:
        if validation.ticket is None:
            return None
        return TicketSerializer(validation.ticket).data
