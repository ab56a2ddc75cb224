"""Domain error taxonomy shared by every app.

Apps raise specific subclasses from their own ``domain/errors.py``; the
category a subclass derives from decides how handlers map it to HTTP.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_BOOKABLE = "EVENT_NOT_BOOKABLE"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    INVALID_ORDER_ID = "INVALID_ORDER_ID"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    ORDER_NUMBER_COLLISION = "ORDER_NUMBER_COLLISION"
    ORDER_FORBIDDEN = "ORDER_FORBIDDEN"
    PAYMENT_ALREADY_EXISTS = "PAYMENT_ALREADY_EXISTS"
    INVALID_WEBHOOK_TOKEN = "INVALID_WEBHOOK_TOKEN"
    GATEWAY_ERROR = "GATEWAY_ERROR"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_TICKET_ID = "INVALID_TICKET_ID"
    TICKET_NOT_VALID = "TICKET_NOT_VALID"
    TICKET_FORBIDDEN = "TICKET_FORBIDDEN"
    TICKET_NUMBER_COLLISION = "TICKET_NUMBER_COLLISION"
    TICKETS_NOT_ISSUABLE = "TICKETS_NOT_ISSUABLE"
    FABRICATION_FAILED = "FABRICATION_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced aggregate does not exist."""


class BadRequestError(DomainError):
    """The request is malformed or not acceptable in the current context."""


class ConflictError(DomainError):
    """The operation conflicts with the current state (illegal transition)."""


class ForbiddenError(DomainError):
    """The actor is not allowed to act on the resource."""


class UnauthorizedError(DomainError):
    """The caller could not be authenticated (webhook token mismatch)."""


class InsufficientInventoryError(DomainError):
    """Not enough quota left for the requested quantity."""


class GatewayError(DomainError):
    """The payment provider was unavailable or rejected the request."""


class FabricationError(DomainError):
    """Ticket artifacts could not be produced or persisted."""
