"""Domain errors for the events module."""

from common.errors import (
    BadRequestError,
    ErrorCode,
    InsufficientInventoryError,
    NotFoundError,
)


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(BadRequestError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotBookableError(BadRequestError):
    """Raised when an event is not published or has already started."""

    def __init__(self, event_id: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_BOOKABLE,
            message=reason,
        )
        self.event_id = event_id


class QuotaExceededError(InsufficientInventoryError):
    """Raised when fewer seats remain than requested."""

    def __init__(self, event_id: str, requested: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_INVENTORY,
            message="Not enough tickets available",
        )
        self.event_id = event_id
        self.requested = requested
