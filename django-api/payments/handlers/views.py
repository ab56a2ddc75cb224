"""HTTP handler for provider payment callbacks."""

import logging

from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.services import OrderService
from orders.services.factory import build_order_service
from payments.handlers.serializers import WebhookSerializer

logger = logging.getLogger(__name__)

CALLBACK_TOKEN_HEADER = "X-Callback-Token"


def get_service() -> OrderService:
    return build_order_service()


class PaymentWebhookView(APIView):
    """Handler for POST /api/payments/webhook

    The callback token is checked before the body is even parsed; ignored
    and duplicate callbacks still answer 200 so the provider stops retrying.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        service = get_service()
        token = request.headers.get(CALLBACK_TOKEN_HEADER)
        service.verify_callback_token(token)

        serializer = WebhookSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = service.process_payment_notification(serializer.to_notification(), token)
        if order is None:
            return Response({"status": "ignored"})
        return Response({"status": "ok", "order_status": order.status.value})
