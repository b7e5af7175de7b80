"""Mapping of domain errors to HTTP responses."""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from swaps.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOT_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCode.SELF_SWAP: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
}


def domain_exception_handler(exc, context):
    """Render DomainError as ``{"error": {"code", "message"}}``; defer the rest to DRF."""
    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.info(
            "%s refused: %s", view.__class__.__name__ if view else "request", exc
        )
        return Response(
            {"error": {"code": exc.code.value, "message": exc.message}},
            status=STATUS_BY_CODE[exc.code],
        )
    return drf_exception_handler(exc, context)
