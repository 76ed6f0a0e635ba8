# shared/common/exceptions.py
"""
Service Exception Base Class and Exception Handler
"""

import logging
import traceback
from typing import Dict, Any, Optional
from rest_framework import status
from rest_framework.views import exception_handler
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.conf import settings

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class ServiceError(Exception):
    """
    Base exception for service layer errors.

    Services raise subclasses of this error; the exception handler below
    turns them into HTTP responses using ``status_code``.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'SERVICE_ERROR'

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def error_response(
    code: str,
    message: str,
    http_status: int,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    **extra
) -> Response:
    """Build the ``{"success": false, "error": {...}}`` envelope."""
    error = {'code': code, 'message': message}
    if details is not None:
        error['details'] = details
    error.update(extra)
    error['request_id'] = request_id
    return Response({'success': False, 'error': error}, status=http_status)


def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    DRF exception handler used by every LearnWise service.

    Service errors map to their own ``status_code``; DRF and Django errors
    are reshaped into the same envelope; anything else becomes a 500.
    """
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    if isinstance(exc, ServiceError):
        log_method = logger.error if exc.status_code >= 500 else logger.info
        log_method(
            f"Service error {exc.code}: {exc.message}",
            extra={'request_id': request_id, 'details': exc.details}
        )
        return error_response(
            exc.code, exc.message, exc.status_code, request_id, exc.details
        )

    response = exception_handler(exc, context)
    if response is not None:
        return format_error_response(exc, response, request_id)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        return error_response(
            'VALIDATION_ERROR', 'Validation error',
            status.HTTP_400_BAD_REQUEST, request_id, errors
        )

    if isinstance(exc, Http404):
        return error_response(
            'NOT_FOUND', str(exc) or 'Resource not found',
            status.HTTP_404_NOT_FOUND, request_id
        )

    logger.exception(
        f"Unhandled exception: {exc}",
        extra={'request_id': request_id, 'exception_type': type(exc).__name__}
    )

    if settings.DEBUG:
        return error_response(
            'INTERNAL_ERROR', str(exc),
            status.HTTP_500_INTERNAL_SERVER_ERROR, request_id,
            type=type(exc).__name__,
            traceback=traceback.format_exc().split('\n'),
        )

    return error_response(
        'INTERNAL_ERROR', 'An unexpected error occurred. Please try again later.',
        status.HTTP_500_INTERNAL_SERVER_ERROR, request_id
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Reshape a response produced by DRF's default handler."""
    code = getattr(exc, 'default_code', 'error')
    if isinstance(code, str):
        code = code.upper()

    details = None
    if isinstance(response.data, dict) and 'detail' not in response.data:
        details = response.data
    elif isinstance(response.data, list):
        details = {'non_field_errors': response.data}

    formatted = error_response(
        code, get_error_message(exc, response), response.status_code, request_id, details
    )
    response.data = formatted.data
    return response


def get_error_message(exc, response: Response) -> str:
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        return str(detail[0])
    if isinstance(detail, dict):
        return str(detail.get('detail', 'Validation error'))

    if isinstance(response.data, dict):
        return str(response.data.get('detail', response.data))
    return str(response.data)
