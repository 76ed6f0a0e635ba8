# services/learning-service/src/apps/core/services/result_service.py
"""
Result Service

Append-only ledger of graded quiz attempts.
"""

import logging
from typing import Any, Iterable, List, Optional

from django.db import DatabaseError, transaction

from common.cache import safe_cache, CacheKeyBuilder

from ..models import QuizAttempt
from ..scoring import calculate_score, is_passing
from .course_service import parse_uuid
from .exceptions import AttemptValidationError, StorageFailureError
from .grading_service import AttemptReport

logger = logging.getLogger(__name__)

progress_keys = CacheKeyBuilder('progress')


class ResultService:
    """
    Service class for recording and querying quiz attempts.

    Attempts are never updated or deleted. Every recorded attempt drops the
    learner's cached progress view.
    """

    @classmethod
    def validate_attempt(
        cls,
        answers: List[Any],
        total_questions: int,
        correct_answers: int,
        score: int,
        passed: bool,
    ) -> None:
        """
        Check the invariants of an attempt before it is stored.

        Raises:
            AttemptValidationError: Any invariant is violated
        """
        if not answers:
            raise AttemptValidationError("Attempt must contain at least one answer", field='answers')

        if total_questions < 1:
            raise AttemptValidationError(
                "Attempt must cover at least one question",
                field='total_questions'
            )

        if len(answers) != total_questions:
            raise AttemptValidationError(
                f"Expected {total_questions} answers, but received {len(answers)}",
                field='answers',
                details={'expected': total_questions, 'received': len(answers)}
            )

        if not 0 <= correct_answers <= total_questions:
            raise AttemptValidationError(
                "Correct answers must be between 0 and the number of questions",
                field='correct_answers',
                details={'correct_answers': correct_answers, 'total_questions': total_questions}
            )

        if not 0 <= score <= 100 or score != calculate_score(correct_answers, total_questions):
            raise AttemptValidationError(
                "Score does not match the graded answers",
                field='score',
                details={
                    'score': score,
                    'expected': calculate_score(correct_answers, total_questions),
                }
            )

        if passed != is_passing(score):
            raise AttemptValidationError(
                "Passed flag does not match the score",
                field='passed',
                details={'score': score, 'passed': passed}
            )

    @classmethod
    def record(
        cls,
        user_id: Any,
        report: AttemptReport,
        time_taken_seconds: Optional[int] = None,
    ) -> QuizAttempt:
        """
        Store a graded attempt.

        Args:
            user_id: Learner UUID
            report: Output of GradingService.grade
            time_taken_seconds: Optional time spent on the quiz

        Returns:
            The new QuizAttempt

        Raises:
            AttemptValidationError: Report violates an invariant
            StorageFailureError: Database write failed
        """
        user_uuid = parse_uuid(user_id, 'user_id')
        lesson_uuid = parse_uuid(report.lesson_id, 'lesson_id')
        course_uuid = parse_uuid(report.course_id, 'course_id')
        answers = report.answers

        cls.validate_attempt(
            answers=answers,
            total_questions=report.total_questions,
            correct_answers=report.correct_answers,
            score=report.score,
            passed=report.passed,
        )

        if time_taken_seconds is not None and time_taken_seconds < 0:
            raise AttemptValidationError(
                "Time taken cannot be negative",
                field='time_taken_seconds'
            )

        try:
            with transaction.atomic():
                attempt = QuizAttempt.objects.create(
                    user_id=user_uuid,
                    lesson_id=lesson_uuid,
                    course_id=course_uuid,
                    quiz_set_key=report.quiz_set_key,
                    answers=answers,
                    total_questions=report.total_questions,
                    correct_answers=report.correct_answers,
                    score=report.score,
                    passed=report.passed,
                    time_taken_seconds=time_taken_seconds,
                )
        except DatabaseError as e:
            logger.error(f"Failed to record attempt for user {user_uuid}: {e}")
            raise StorageFailureError("Failed to save quiz result") from e

        cls.invalidate_progress(user_uuid)

        logger.info(
            f"Attempt {attempt.id} recorded for user {user_uuid} "
            f"on lesson {report.lesson_id}: {report.score}%"
        )
        return attempt

    @staticmethod
    def invalidate_progress(user_id: Any) -> None:
        safe_cache.delete(progress_keys.build(user_id))

    # ==========================================================================
    # Queries
    # ==========================================================================

    @classmethod
    def _query(cls, queryset) -> List[QuizAttempt]:
        try:
            return list(queryset)
        except DatabaseError as e:
            logger.error(f"Failed to load quiz attempts: {e}")
            raise StorageFailureError("Failed to load quiz results") from e

    @classmethod
    def list_by_user(cls, user_id: Any) -> List[QuizAttempt]:
        """All attempts of a learner, newest first."""
        user_uuid = parse_uuid(user_id, 'user_id')
        return cls._query(
            QuizAttempt.objects.filter(user_id=user_uuid).order_by('-created_at')
        )

    @classmethod
    def list_by_user_and_lesson(cls, user_id: Any, lesson_id: Any) -> List[QuizAttempt]:
        user_uuid = parse_uuid(user_id, 'user_id')
        lesson_uuid = parse_uuid(lesson_id, 'lesson_id')
        return cls._query(
            QuizAttempt.objects.filter(
                user_id=user_uuid,
                lesson_id=lesson_uuid
            ).order_by('-created_at')
        )

    @classmethod
    def best_attempt(cls, user_id: Any, lesson_id: Any) -> Optional[QuizAttempt]:
        """Highest scoring attempt; the newest wins a tie."""
        attempts = cls.list_by_user_and_lesson(user_id, lesson_id)
        if not attempts:
            return None
        return max(attempts, key=lambda attempt: (attempt.score, attempt.created_at))

    @classmethod
    def latest_attempt(cls, user_id: Any, lesson_id: Any) -> Optional[QuizAttempt]:
        attempts = cls.list_by_user_and_lesson(user_id, lesson_id)
        return attempts[0] if attempts else None

    @classmethod
    def list_for_lessons(cls, user_id: Any, lesson_ids: Iterable[Any]) -> List[QuizAttempt]:
        """Attempts of a learner restricted to the given lessons, newest first."""
        user_uuid = parse_uuid(user_id, 'user_id')
        lesson_uuids = [parse_uuid(lesson_id, 'lesson_id') for lesson_id in lesson_ids]
        if not lesson_uuids:
            return []
        return cls._query(
            QuizAttempt.objects.filter(
                user_id=user_uuid,
                lesson_id__in=lesson_uuids
            ).order_by('-created_at')
        )
