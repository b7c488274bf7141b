"""
Maps application exceptions onto HTTP responses for the REST API
"""
import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback
from core.exceptions import (
    BaseApplicationException,
    BusinessLogicError,
    DuplicateKeyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_EXCEPTION = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessLogicError, status.HTTP_400_BAD_REQUEST),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (DuplicateKeyError, status.HTTP_409_CONFLICT),
]


def exception_handler(exc, context):
    """DRF exception handler aware of the application exception hierarchy"""
    if isinstance(exc, BaseApplicationException):
        http_status = status.HTTP_400_BAD_REQUEST
        for exc_class, mapped_status in STATUS_BY_EXCEPTION:
            if isinstance(exc, exc_class):
                http_status = mapped_status
                break

        view = context.get('view')
        logger.info(
            f"{type(exc).__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        set_rollback()
        return Response(
            {'detail': exc.message, 'code': exc.code, 'details': exc.details},
            status=http_status
        )

    return drf_exception_handler(exc, context)
