"""DRF exception handler that renders domain errors.

Every form submission ends up here on failure. Domain errors are mapped to a
status code and rendered as a single user-visible message; anything else is
left to DRF's default handling.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from common.errors import (
    ConflictError,
    DomainError,
    ErrorPayload,
    InvalidIdError,
    NotAuthenticatedError,
    NotFoundError,
    UploadError,
    ValidationError,
    WriteError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidIdError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UploadError, status.HTTP_502_BAD_GATEWAY),
    (WriteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
)


def status_for(error: DomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_exception_handler(exc, context):
    """Render DomainError as {"error": {...}}; defer everything else to DRF."""
    if isinstance(exc, DomainError):
        code = status_for(exc)
        if code >= 500:
            logger.error("Request failed: %s", exc)
        else:
            logger.info("Request rejected: %s", exc)
        return Response({"error": ErrorPayload.from_error(exc).as_dict()}, status=code)
    return drf_exception_handler(exc, context)
