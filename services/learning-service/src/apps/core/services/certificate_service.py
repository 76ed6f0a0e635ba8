# services/learning-service/src/apps/core/services/certificate_service.py
"""
Certificate Service

Decides whether a learner has earned a course certificate from the best
score on each lesson they attempted.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from django.conf import settings
from django.utils import timezone

from common.authentication import Principal

from ..scoring import CERTIFICATE_PASSING_SCORE, mean_score
from .access import ensure_can_access_user
from .course_service import CourseService, parse_uuid
from .exceptions import InvalidStateError
from .result_service import ResultService

logger = logging.getLogger(__name__)


@dataclass
class CertificateEligibility:
    """A certificate issued for a passed course."""
    user_id: str
    course: Dict[str, Any]
    overall_score: Decimal
    completion_date: datetime
    lessons_completed: int
    total_lessons: int
    lesson_scores: Dict[str, int]
    certificate_id: str
    eligible: bool = field(default=True, init=False)


@dataclass
class CertificateNotEligible:
    """Diagnostics for a learner who has not yet earned the certificate."""
    user_id: str
    course_id: str
    current_score: Decimal
    required_score: int
    lessons_completed: int
    total_lessons: int
    lesson_scores: Dict[str, int]
    reason: str
    eligible: bool = field(default=False, init=False)


EvaluationResult = Union[CertificateEligibility, CertificateNotEligible]


def certificate_id_for(user_id: Any, course_id: Any, issued_at: datetime) -> str:
    """CERT-<last 6 of user>-<last 6 of course>-<epoch milliseconds>"""
    epoch_ms = int(issued_at.timestamp() * 1000)
    return f"CERT-{str(user_id)[-6:]}-{str(course_id)[-6:]}-{epoch_ms}"


class CertificateService:
    """
    Service class for certificate eligibility.

    Evaluation only reads the ledger; calling it twice without new
    attempts gives the same score and verdict.
    """

    @classmethod
    def requires_all_lessons(cls) -> bool:
        return bool(
            getattr(settings, 'LEARNING_SETTINGS', {}).get('CERTIFICATE_REQUIRES_ALL_LESSONS', False)
        )

    @classmethod
    def evaluate(
        cls,
        user_id: Any,
        course_id: Any,
        now: Optional[datetime] = None,
        principal: Optional[Principal] = None,
    ) -> EvaluationResult:
        """
        Evaluate certificate eligibility of a learner for a course.

        Args:
            user_id: Learner UUID
            course_id: Course UUID
            now: Issue time; defaults to the current time
            principal: Caller; learners may only evaluate themselves

        Returns:
            CertificateEligibility or CertificateNotEligible

        Raises:
            InvalidInputError: Malformed ids
            NotFoundError: Course not found
            InvalidStateError: Course has no lessons, or learner has no attempts
            PermissionDeniedError: Caller may not read this learner
        """
        user_uuid = parse_uuid(user_id, 'user_id')
        ensure_can_access_user(principal, user_uuid)
        course = CourseService.get_course(course_id)

        lessons = list(CourseService.get_course_lessons(course.id))
        total_lessons = len(lessons)
        if total_lessons == 0:
            raise InvalidStateError(
                "No lessons found for this course",
                code="NO_LESSONS",
                details={'course_id': str(course.id), 'total_lessons': 0}
            )

        attempts = ResultService.list_for_lessons(user_uuid, [lesson.id for lesson in lessons])
        if not attempts:
            raise InvalidStateError(
                "User has not taken any quizzes for this course",
                code="NO_ATTEMPTS",
                details={
                    'course_id': str(course.id),
                    'lessons_completed': 0,
                    'total_lessons': total_lessons,
                }
            )

        lesson_scores: Dict[str, int] = {}
        for attempt in attempts:
            lesson_id = str(attempt.lesson_id)
            if attempt.score > lesson_scores.get(lesson_id, -1):
                lesson_scores[lesson_id] = attempt.score

        overall_score = mean_score(lesson_scores.values(), places=2)
        lessons_completed = len(lesson_scores)

        reason = None
        if overall_score < CERTIFICATE_PASSING_SCORE:
            reason = "User has not passed this course"
        elif cls.requires_all_lessons() and lessons_completed < total_lessons:
            reason = "User has not attempted every lesson of this course"

        if reason:
            logger.info(
                f"User {user_uuid} not eligible for course {course.id}: "
                f"{overall_score} ({lessons_completed}/{total_lessons} lessons)"
            )
            return CertificateNotEligible(
                user_id=str(user_uuid),
                course_id=str(course.id),
                current_score=overall_score,
                required_score=CERTIFICATE_PASSING_SCORE,
                lessons_completed=lessons_completed,
                total_lessons=total_lessons,
                lesson_scores=lesson_scores,
                reason=reason,
            )

        issued_at = now or timezone.now()
        certificate = CertificateEligibility(
            user_id=str(user_uuid),
            course={
                'id': str(course.id),
                'title': course.title,
                'category': course.category,
            },
            overall_score=overall_score,
            completion_date=issued_at,
            lessons_completed=lessons_completed,
            total_lessons=total_lessons,
            lesson_scores=lesson_scores,
            certificate_id=certificate_id_for(user_uuid, course.id, issued_at),
        )

        logger.info(f"Certificate {certificate.certificate_id} issued to user {user_uuid}")
        return certificate
