# services/learning-service/src/apps/core/services/__init__.py
"""
Learning Service - Service Layer

Business logic for courses, quizzes, results, progress and certificates.
"""

from .exceptions import (
    LearningServiceError,
    NotFoundError,
    InvalidInputError,
    AttemptValidationError,
    InvalidStateError,
    PermissionDeniedError,
    StorageFailureError,
)

from .media_service import MediaStorageService, MediaKind
from .course_service import CourseService, parse_uuid
from .question_service import QuestionService
from .grading_service import GradingService, AttemptReport, AnswerDetail
from .result_service import ResultService
from .progress_service import ProgressService, ProgressReport
from .certificate_service import (
    CertificateService,
    CertificateEligibility,
    CertificateNotEligible,
)

__all__ = [
    # Exceptions
    'LearningServiceError',
    'NotFoundError',
    'InvalidInputError',
    'AttemptValidationError',
    'InvalidStateError',
    'PermissionDeniedError',
    'StorageFailureError',
    # Services
    'MediaStorageService',
    'MediaKind',
    'CourseService',
    'parse_uuid',
    'QuestionService',
    'GradingService',
    'AttemptReport',
    'AnswerDetail',
    'ResultService',
    'ProgressService',
    'ProgressReport',
    'CertificateService',
    'CertificateEligibility',
    'CertificateNotEligible',
]
