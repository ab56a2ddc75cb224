"""Domain errors for the tickets module."""

from common.errors import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    FabricationError,
    ForbiddenError,
    NotFoundError,
)


class TicketNotFoundError(NotFoundError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_id = ticket_id


class InvalidTicketIdError(BadRequestError):
    """Raised when a ticket ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_ID,
            message="Invalid ticket ID format",
        )


class IssuanceNotFoundError(NotFoundError):
    """Raised when tickets are requested for an order that does not exist."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NOT_FOUND,
            message="Order not found",
        )
        self.order_id = order_id


class TicketAccessDeniedError(ForbiddenError):
    """Raised when the actor does not own the ticket's order."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_FORBIDDEN,
            message="You do not have permission to access this ticket",
        )


class TicketNotValidError(ConflictError):
    """Raised when checking in a ticket that is not usable."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_VALID,
            message=reason,
        )


class TicketNumberCollisionError(FabricationError):
    """Raised when a batch insert hits the unique ticket-number constraint."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NUMBER_COLLISION,
            message="Ticket number collision",
        )
        self.order_id = order_id


class TicketFabricationError(FabricationError):
    """Raised when a QR or PDF artifact cannot be produced or stored."""

    def __init__(self, subject: str, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.FABRICATION_FAILED,
            message="Ticket artifacts could not be generated",
        )
        self.subject = subject
        self.detail = detail


class TicketsNotIssuableError(ConflictError):
    """Raised when tickets are requested for an order that is not paid."""

    def __init__(self, order_status: str) -> None:
        super().__init__(
            code=ErrorCode.TICKETS_NOT_ISSUABLE,
            message=f"Tickets can only be generated for paid orders (order is {order_status})",
        )
        self.order_status = order_status
