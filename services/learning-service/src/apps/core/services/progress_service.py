# services/learning-service/src/apps/core/services/progress_service.py
"""
Progress Service

Builds a learner's progress view from the attempt ledger: summary stats,
attempts grouped by course and lesson, and the most recent results.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from django.conf import settings

from common.authentication import Principal
from common.cache import safe_cache

from ..scoring import mean_score
from .access import ensure_can_access_user
from .course_service import CourseService, parse_uuid
from .result_service import ResultService, progress_keys

logger = logging.getLogger(__name__)


@dataclass
class ProgressStats:
    total_quizzes_taken: int = 0
    quizzes_passed: int = 0
    average_score: int = 0
    courses_started: int = 0


@dataclass
class ProgressReport:
    """Aggregated progress of one learner."""
    user_id: str
    stats: ProgressStats
    results_by_course: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    recent_results: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _learning_setting(name: str, default: Any) -> Any:
    return getattr(settings, 'LEARNING_SETTINGS', {}).get(name, default)


class ProgressService:
    """
    Service class for learner progress.
    """

    @classmethod
    def get_progress(
        cls,
        user_id: Any,
        principal: Optional[Principal] = None,
        use_cache: bool = True,
    ) -> Dict[str, Any]:
        """
        Progress view of a learner as a dict, served from cache when present.

        Raises:
            InvalidInputError: Malformed user id
            PermissionDeniedError: Caller may not read this learner
            StorageFailureError: Ledger or lesson lookup failed
        """
        user_uuid = parse_uuid(user_id, 'user_id')
        ensure_can_access_user(principal, user_uuid)
        cache_key = progress_keys.build(user_uuid)

        if use_cache:
            cached = safe_cache.get(cache_key)
            if cached is not None:
                return cached

        progress = cls.aggregate(user_uuid).to_dict()

        if use_cache:
            safe_cache.set(
                cache_key,
                progress,
                timeout=_learning_setting('PROGRESS_CACHE_TIMEOUT', 300)
            )
        return progress

    @classmethod
    def aggregate(cls, user_id: Any) -> ProgressReport:
        """
        Aggregate every attempt of a learner.

        Attempts whose lesson or course no longer exists still count in
        total_quizzes_taken but are left out of the grouping.
        """
        attempts = ResultService.list_by_user(user_id)
        lessons = CourseService.resolve_lessons({attempt.lesson_id for attempt in attempts})

        results_by_course: Dict[str, Dict[str, Any]] = {}
        for attempt in attempts:
            lesson = lessons.get(str(attempt.lesson_id))
            if lesson is None:
                logger.warning(
                    f"Skipping attempt {attempt.id}: lesson {attempt.lesson_id} no longer exists"
                )
                continue

            course = lesson.course
            course_id = str(course.id)
            lesson_id = str(lesson.id)

            course_entry = results_by_course.setdefault(course_id, {
                'course_id': course_id,
                'course_name': course.title,
                'lessons': {},
            })
            lesson_entry = course_entry['lessons'].setdefault(lesson_id, {
                'lesson_id': lesson_id,
                'lesson_name': lesson.title,
                'attempts': [],
            })
            lesson_entry['attempts'].append(cls._attempt_entry(attempt))

        stats = ProgressStats(
            total_quizzes_taken=len(attempts),
            quizzes_passed=sum(1 for attempt in attempts if attempt.passed),
            average_score=int(mean_score(attempt.score for attempt in attempts)),
            courses_started=len(results_by_course),
        )

        recent_limit = _learning_setting('RECENT_RESULTS_LIMIT', 5)
        recent_results = []
        for attempt in attempts[:recent_limit]:
            lesson = lessons.get(str(attempt.lesson_id))
            entry = cls._attempt_entry(attempt)
            entry.update({
                'lesson_id': str(attempt.lesson_id),
                'lesson_name': lesson.title if lesson else None,
                'course_id': str(lesson.course_id) if lesson else None,
                'course_name': lesson.course.title if lesson else None,
            })
            recent_results.append(entry)

        return ProgressReport(
            user_id=str(user_id),
            stats=stats,
            results_by_course=results_by_course,
            recent_results=recent_results,
        )

    @staticmethod
    def _attempt_entry(attempt) -> Dict[str, Any]:
        return {
            'id': str(attempt.id),
            'score': attempt.score,
            'passed': attempt.passed,
            'total_questions': attempt.total_questions,
            'correct_answers': attempt.correct_answers,
            'created_at': attempt.created_at.isoformat(),
        }
