"""Global exception handlers that map domain exceptions to HTTP responses.

Responses never carry error details: the status code is the whole answer.
"""

import logging

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError

from app.errors import (
    SUBSCRIPTION_FAILED,
    VALIDATION_ERROR,
    DomainValidationError,
    SubscriptionFailedError,
)

logger = logging.getLogger(__name__)


def _empty_response(status_code: int) -> Response:
    return Response(status_code=status_code)


def domain_validation_error_handler(
    request: Request, exc: DomainValidationError
) -> Response:
    logger.info("%s on %s %s: %s", VALIDATION_ERROR, request.method, request.url.path, exc)
    return _empty_response(status.HTTP_400_BAD_REQUEST)


def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    logger.info(
        "%s on %s %s: %s", VALIDATION_ERROR, request.method, request.url.path, exc.errors()
    )
    return _empty_response(status.HTTP_400_BAD_REQUEST)


def subscription_failed_error_handler(
    request: Request, exc: SubscriptionFailedError
) -> Response:
    # Already logged with its cause chain where it was raised.
    logger.warning(
        "%s on %s %s: %s", SUBSCRIPTION_FAILED, request.method, request.url.path, exc.stage
    )
    return _empty_response(status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SubscriptionFailedError, subscription_failed_error_handler)
