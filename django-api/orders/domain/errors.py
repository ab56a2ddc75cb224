"""Domain errors for the orders module."""

from common.errors import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
)


class OrderNotFoundError(NotFoundError):
    """Raised when an order is not found."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NOT_FOUND,
            message="Order not found",
        )
        self.order_id = order_id


class InvalidOrderIdError(BadRequestError):
    """Raised when an order ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ORDER_ID,
            message="Invalid order ID format",
        )


class InvalidQuantityError(BadRequestError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="Quantity must be a positive integer",
        )


class InvalidOrderTransitionError(ConflictError):
    """Raised when a trigger is not allowed from the order's current status."""

    def __init__(self, current: str, trigger: str, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=message or f"Cannot {trigger} an order with status '{current}'",
        )
        self.current = current
        self.trigger = trigger


class OrderNumberCollisionError(ConflictError):
    """Raised when a generated order or invoice number is already taken."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NUMBER_COLLISION,
            message="Could not allocate an order number",
        )


class OrderAccessDeniedError(ForbiddenError):
    """Raised when the actor neither owns the order nor is staff."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ORDER_FORBIDDEN,
            message="You do not have permission to access this order",
        )
