"""DRF exception handler mapping domain errors to HTTP responses.

Handlers never expose internal error details: only the error code and the
user-safe message leave the process.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.errors import (
    BadRequestError,
    ConflictError,
    DomainError,
    FabricationError,
    ForbiddenError,
    GatewayError,
    InsufficientInventoryError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BadRequestError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InsufficientInventoryError, status.HTTP_409_CONFLICT),
    (GatewayError, status.HTTP_502_BAD_GATEWAY),
    (FabricationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(error: DomainError) -> int:
    for category, http_status in STATUS_BY_CATEGORY:
        if isinstance(error, category):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_exception_handler(exc, context):
    """Render DomainError subclasses; defer everything else to DRF."""
    if isinstance(exc, DomainError):
        http_status = status_for(exc)
        if http_status >= 500:
            logger.error("Unhandled domain failure in %s: %s", context.get("view"), exc)
        return Response(
            {"code": exc.code.value, "message": exc.message},
            status=http_status,
        )
    return exception_handler(exc, context)
