# services/learning-service/src/apps/core/services/exceptions.py
"""
Learning Service Exceptions

Custom exceptions for learning service operations.
"""

from typing import Optional, Dict, Any

from rest_framework import status

from common.exceptions import ServiceError


class LearningServiceError(ServiceError):
    """Base exception for learning service errors."""

    default_code = "LEARNING_SERVICE_ERROR"


class NotFoundError(LearningServiceError):
    """Raised when a course, lesson, question or quiz set does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = None,
        resource_id: Any = None,
        message: str = None,
        details: Optional[Dict[str, Any]] = None
    ):
        msg = message or f"{resource or 'Resource'} not found: {resource_id}"
        error_details = details or {}
        if resource_id is not None:
            error_details.setdefault(f"{(resource or 'resource').lower()}_id", str(resource_id))
        super().__init__(message=msg, details=error_details)


class InvalidInputError(LearningServiceError):
    """Raised when request data fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "INVALID_INPUT"

    def __init__(
        self,
        message: str,
        field: str = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, details=error_details)


class AttemptValidationError(InvalidInputError):
    """Raised when an attempt violates the ledger invariants."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "ATTEMPT_VALIDATION_ERROR"


class InvalidStateError(LearningServiceError):
    """Raised when an operation is impossible in the current data state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "INVALID_STATE"


class PermissionDeniedError(LearningServiceError):
    """Raised when the caller may not act on the requested learner."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "PERMISSION_DENIED"


class StorageFailureError(LearningServiceError):
    """Raised when the database or media store fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "STORAGE_FAILURE"
