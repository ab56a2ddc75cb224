"""HTTP handlers for orders. HTTP concerns only; see OrderService."""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from orders.domain import OrderStatus
from orders.handlers.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    PaymentSerializer,
)
from orders.services import OrderService
from orders.services.factory import build_order_service
from tickets.handlers.serializers import TicketSerializer


def get_service() -> OrderService:
    return build_order_service()


class OrderListView(APIView):
    """Handler for GET/POST /api/orders"""

    def get(self, request: Request) -> Response:
        raw_status = request.query_params.get("status")
        try:
            order_status = OrderStatus(raw_status) if raw_status else None
        except ValueError:
            raise ValidationError({"status": f"Unknown order status {raw_status!r}"})
        orders = get_service().list_orders(Actor.from_user(request.user), order_status)
        return Response({"results": OrderSerializer(orders, many=True).data})

    def post(self, request: Request) -> Response:
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        created = get_service().create_order(
            Actor.from_user(request.user),
            serializer.validated_data["event_id"],
            serializer.validated_data["quantity"],
        )
        return Response(
            {
                "order": OrderSerializer(created.order).data,
                "payment": PaymentSerializer(created.payment).data,
            },
            status=status.HTTP_201_CREATED,
        )


class OrderDetailView(APIView):
    """Handler for GET /api/orders/{order_id}"""

    def get(self, request: Request, order_id: str) -> Response:
        details = get_service().get_order(order_id, Actor.from_user(request.user))
        return Response(
            {
                "order": OrderSerializer(details.order).data,
                "payment": PaymentSerializer(details.payment).data if details.payment else None,
                "tickets": TicketSerializer(details.tickets, many=True).data,
            }
        )


class OrderCancelView(APIView):
    """Handler for POST /api/orders/{order_id}/cancel"""

    def post(self, request: Request, order_id: str) -> Response:
        order = get_service().cancel_order(order_id, Actor.from_user(request.user))
        return Response(OrderSerializer(order).data)


class OrderPaymentView(APIView):
    """Handler for POST /api/orders/{order_id}/payment"""

    def post(self, request: Request, order_id: str) -> Response:
        payment = get_service().create_payment(order_id, Actor.from_user(request.user))
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class OrderResendEmailView(APIView):
    """Handler for POST /api/orders/{order_id}/resend-email"""

    def post(self, request: Request, order_id: str) -> Response:
        result = get_service().resend_order_email(order_id, Actor.from_user(request.user))
        return Response({"status": result.value})
