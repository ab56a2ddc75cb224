"""HTTP handlers for tickets. HTTP concerns only; see TicketService."""

import os

from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from tickets.handlers.serializers import TicketSerializer, TicketValidationSerializer
from tickets.services import TicketService
from tickets.services.factory import build_ticket_service


def get_service() -> TicketService:
    return build_ticket_service()


class OrderTicketListView(APIView):
    """Handler for /api/orders/{order_id}/tickets

    GET lists the order's tickets; POST issues them for a paid order that has
    none yet and is safe to repeat.
    """

    def get(self, request: Request, order_id: str) -> Response:
        tickets = get_service().list_for_order(order_id, Actor.from_user(request.user))
        return Response({"results": TicketSerializer(tickets, many=True).data})

    def post(self, request: Request, order_id: str) -> Response:
        tickets = get_service().generate(order_id, Actor.from_user(request.user))
        return Response(
            {"results": TicketSerializer(tickets, many=True).data},
            status=status.HTTP_201_CREATED,
        )


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = get_service().get_ticket(ticket_id, Actor.from_user(request.user))
        return Response(TicketSerializer(ticket).data)


class TicketDownloadView(APIView):
    """Handler for GET /api/tickets/{ticket_id}/download"""

    def get(self, request: Request, ticket_id: str) -> HttpResponse:
        name, content = get_service().download(ticket_id, Actor.from_user(request.user))
        response = HttpResponse(content, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{os.path.basename(name)}"'
        return response


class TicketRegenerateView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/regenerate"""

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_service().regenerate(ticket_id, Actor.from_user(request.user))
        return Response(TicketSerializer(ticket).data)


class TicketValidateView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/validate (gate staff)"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, ticket_id: str) -> Response:
        validation = get_service().validate(ticket_id)
        return Response(TicketValidationSerializer(validation).data)


class TicketCheckInView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/check-in"""

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_service().check_in(ticket_id, Actor.from_user(request.user))
        return Response(TicketSerializer(ticket).data)
