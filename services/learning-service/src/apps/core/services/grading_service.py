# services/learning-service/src/apps/core/services/grading_service.py
"""
Grading Service

Scores a quiz submission against the questions of a lesson.
Grading never writes; recording the attempt is the result service's job.
"""

import hashlib
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from ..models import Question
from ..scoring import calculate_score, is_passing
from .course_service import parse_uuid
from .exceptions import InvalidInputError, NotFoundError
from .question_service import QuestionService

logger = logging.getLogger(__name__)


@dataclass
class AnswerDetail:
    """Per-question grading outcome."""
    question_id: str
    question: str
    options: List[str]
    user_answer: Optional[str]
    correct_answer: str
    is_correct: bool


@dataclass
class AttemptReport:
    """Result of grading one submission."""
    lesson_id: str
    course_id: str
    quiz_set_key: str
    total_questions: int
    correct_answers: int
    score: int
    passed: bool
    details: List[AnswerDetail] = field(default_factory=list)

    @property
    def answers(self) -> List[Optional[str]]:
        """Submitted answers in question order."""
        return [detail.user_answer for detail in self.details]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def quiz_set_key(question_ids: Sequence[Any]) -> str:
    """Stable digest of an ordered list of question ids."""
    joined = ','.join(str(question_id) for question_id in question_ids)
    return hashlib.sha256(joined.encode('utf-8')).hexdigest()


class GradingService:
    """
    Service class for grading quiz submissions.

    Two answer forms are accepted:
    - positional: ``["A", "B", ...]``, answer i goes to question i
    - explicit: ``[{"question_id": ..., "answer": ...}, ...]``
    """

    @classmethod
    def grade(cls, lesson_id: Any, submitted_answers: Any) -> AttemptReport:
        """
        Grade a submission for a lesson.

        Raises:
            InvalidInputError: Malformed id, empty or mismatched answers
            NotFoundError: Lesson missing or without questions
        """
        parse_uuid(lesson_id, 'lesson_id')

        if not isinstance(submitted_answers, (list, tuple)) or not submitted_answers:
            raise InvalidInputError("Answers must be a non-empty array", field='answers')

        questions = QuestionService.get_lesson_questions(lesson_id)
        if not questions:
            raise NotFoundError(
                'Quiz',
                message="No quizzes found for this lesson",
                details={'lesson_id': str(lesson_id)}
            )

        if all(isinstance(answer, dict) for answer in submitted_answers):
            answers = cls._match_explicit(questions, submitted_answers)
        elif all(isinstance(answer, str) for answer in submitted_answers):
            answers = cls._match_positional(questions, submitted_answers)
        else:
            raise InvalidInputError(
                "Answers must be all strings or all {question_id, answer} objects",
                field='answers'
            )

        details = []
        for question, answer in zip(questions, answers):
            details.append(AnswerDetail(
                question_id=str(question.id),
                question=question.question_text,
                options=list(question.options),
                user_answer=answer,
                correct_answer=question.correct_answer,
                is_correct=question.is_correct_answer(answer),
            ))

        total = len(questions)
        correct = sum(1 for detail in details if detail.is_correct)
        score = calculate_score(correct, total)

        report = AttemptReport(
            lesson_id=str(questions[0].lesson_id),
            course_id=str(questions[0].lesson.course_id),
            quiz_set_key=quiz_set_key(question.id for question in questions),
            total_questions=total,
            correct_answers=correct,
            score=score,
            passed=is_passing(score),
            details=details,
        )

        logger.debug(
            f"Graded lesson {report.lesson_id}: {correct}/{total} ({score}%)"
        )
        return report

    @staticmethod
    def _match_positional(questions: List[Question], answers: Sequence[str]) -> List[str]:
        if len(answers) != len(questions):
            raise InvalidInputError(
                f"Expected {len(questions)} answers, but received {len(answers)}",
                field='answers',
                details={'expected': len(questions), 'received': len(answers)}
            )
        return list(answers)

    @staticmethod
    def _match_explicit(
        questions: List[Question],
        answers: Sequence[Dict[str, Any]]
    ) -> List[str]:
        by_question: Dict[str, str] = {}
        duplicate_ids = []
        malformed = []

        for entry in answers:
            question_id = entry.get('question_id')
            answer = entry.get('answer')
            if question_id is None or not isinstance(answer, str):
                malformed.append(entry)
                continue
            question_id = str(question_id)
            if question_id in by_question:
                duplicate_ids.append(question_id)
            by_question[question_id] = answer

        if malformed:
            raise InvalidInputError(
                "Each answer must have a question_id and a string answer",
                field='answers',
                details={'malformed': len(malformed)}
            )

        expected_ids = [str(question.id) for question in questions]
        unknown_ids = sorted(set(by_question) - set(expected_ids))
        missing_ids = [question_id for question_id in expected_ids if question_id not in by_question]

        if duplicate_ids or unknown_ids or missing_ids:
            raise InvalidInputError(
                "Each question of the lesson must be answered exactly once",
                field='answers',
                details={
                    'expected': len(expected_ids),
                    'received': len(answers),
                    'duplicate_question_ids': sorted(set(duplicate_ids)),
                    'unknown_question_ids': unknown_ids,
                    'missing_question_ids': missing_ids,
                }
            )

        return [by_question[question_id] for question_id in expected_ids]
