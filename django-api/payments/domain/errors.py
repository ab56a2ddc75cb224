"""Domain errors for the payments module."""

from common.errors import ConflictError, ErrorCode, GatewayError, UnauthorizedError


class PaymentGatewayError(GatewayError):
    """Raised when the provider call fails for any reason, timeouts included."""

    def __init__(self, operation: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.GATEWAY_ERROR,
            message="Payment provider request failed",
        )
        self.operation = operation
        self.detail = detail


class PaymentAlreadyExistsError(ConflictError):
    """Raised when an order already has its Payment."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_ALREADY_EXISTS,
            message="Payment already exists for this order",
        )
        self.order_id = order_id


class InvalidWebhookTokenError(UnauthorizedError):
    """Raised when the callback token does not match the configured one."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_WEBHOOK_TOKEN,
            message="Invalid callback token",
        )
