"""Django REST Framework integration for the domain error taxonomy."""

from __future__ import annotations

import structlog
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    BookingStateError,
    DataAccessError,
    DomainError,
    InsufficientCapacityError,
    InvalidDiscountError,
    InvalidRangeError,
    QuantityOutOfRangeError,
    UnsupportedResourceError,
    WarehouseNotFoundError,
)

logger = structlog.get_logger(__name__)

DOMAIN_ERROR_STATUS = {
    InvalidRangeError: status.HTTP_400_BAD_REQUEST,
    QuantityOutOfRangeError: status.HTTP_400_BAD_REQUEST,
    InvalidDiscountError: status.HTTP_400_BAD_REQUEST,
    WarehouseNotFoundError: status.HTTP_404_NOT_FOUND,
    UnsupportedResourceError: status.HTTP_404_NOT_FOUND,
    InsufficientCapacityError: status.HTTP_409_CONFLICT,
    BookingStateError: status.HTTP_409_CONFLICT,
    DataAccessError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: DomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in DOMAIN_ERROR_STATUS:
            return DOMAIN_ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


def domain_exception_handler(exc, context):
    """Render DomainError subclasses; defer everything else to DRF."""

    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("api.domain_error", code=exc.code, error=str(exc), exc_info=exc)
    else:
        logger.info("api.domain_error", code=exc.code, error=str(exc))

    payload = {"detail": str(exc), "code": exc.code}
    if isinstance(exc, InsufficientCapacityError):
        payload["requested"] = str(exc.requested)
        payload["available"] = str(exc.available)
    return Response(payload, status=status_code)
