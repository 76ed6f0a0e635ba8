# services/learning-service/src/apps/core/services/question_service.py
"""
Question Service

Question store operations: create, update, delete and ordered lookup of the
multiple-choice questions attached to a lesson.
"""

import logging
from typing import Any, List

from django.db import transaction
from django.db.models import QuerySet

from ..models import Lesson, Question, validate_question_content
from .course_service import CourseService, parse_uuid
from .exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


class QuestionService:
    """
    Service class for quiz questions.
    """

    EDITABLE_FIELDS = ('question_text', 'options', 'correct_answer')

    @classmethod
    def _validate(cls, question_text: Any, options: Any, correct_answer: Any) -> None:
        errors = validate_question_content(question_text, options, correct_answer)
        if errors:
            first_error = next(iter(errors.values()))[0]
            raise InvalidInputError(first_error, details={'errors': errors})

    @classmethod
    @transaction.atomic
    def create_question(
        cls,
        lesson_id: Any,
        question_text: str,
        options: List[str],
        correct_answer: str,
        course_id: Any = None,
    ) -> Question:
        """
        Create a question for a lesson.

        Args:
            lesson_id: Lesson UUID
            question_text: Question prompt
            options: Exactly four distinct answer options
            correct_answer: One of the options
            course_id: Optional course UUID; must own the lesson

        Raises:
            InvalidInputError: Content rules violated or course/lesson mismatch
            NotFoundError: Lesson or course not found
        """
        lesson = CourseService.get_lesson(lesson_id)

        if course_id is not None:
            course = CourseService.get_course(course_id)
            if lesson.course_id != course.id:
                raise InvalidInputError(
                    "Lesson does not belong to the specified course",
                    field='lesson_id',
                    details={'lesson_id': str(lesson.id), 'course_id': str(course.id)}
                )

        cls._validate(question_text, options, correct_answer)

        # Lock the lesson so concurrent creates get distinct sequence numbers
        Lesson.objects.select_for_update().get(id=lesson.id)

        question = Question.objects.create(
            lesson=lesson,
            course_id=lesson.course_id,
            question_text=question_text.strip(),
            options=list(options),
            correct_answer=correct_answer,
        )

        logger.info(f"Question {question.id} created for lesson {lesson.id}")
        return question

    @classmethod
    def get_question(cls, question_id: Any) -> Question:
        question_uuid = parse_uuid(question_id, 'question_id')
        try:
            return Question.objects.select_related('lesson', 'course').get(id=question_uuid)
        except Question.DoesNotExist:
            raise NotFoundError('Question', question_uuid)

    @classmethod
    @transaction.atomic
    def update_question(cls, question_id: Any, **changes: Any) -> Question:
        """
        Update the text, options and/or correct answer of a question.

        The merged question is validated before anything is written.
        Concurrent edits are serialized on the row; the last one wins.

        Raises:
            InvalidInputError: Unknown field or content rules violated
            NotFoundError: Question not found
        """
        unknown_fields = set(changes) - set(cls.EDITABLE_FIELDS)
        if unknown_fields:
            raise InvalidInputError(
                f"Fields cannot be updated: {', '.join(sorted(unknown_fields))}",
                details={'fields': sorted(unknown_fields)}
            )

        question_uuid = parse_uuid(question_id, 'question_id')
        try:
            question = Question.objects.select_for_update().get(id=question_uuid)
        except Question.DoesNotExist:
            raise NotFoundError('Question', question_uuid)

        merged = {field: getattr(question, field) for field in cls.EDITABLE_FIELDS}
        merged.update(changes)
        cls._validate(merged['question_text'], merged['options'], merged['correct_answer'])

        question.question_text = merged['question_text'].strip()
        question.options = list(merged['options'])
        question.correct_answer = merged['correct_answer']
        question.save(update_fields=['question_text', 'options', 'correct_answer', 'updated_at'])

        logger.info(f"Question {question.id} updated: {sorted(changes)}")
        return question

    @classmethod
    @transaction.atomic
    def delete_question(cls, question_id: Any) -> None:
        question_uuid = parse_uuid(question_id, 'question_id')
        deleted, _ = Question.objects.filter(id=question_uuid).delete()
        if not deleted:
            raise NotFoundError('Question', question_uuid)
        logger.info(f"Question {question_uuid} deleted")

    @classmethod
    def get_lesson_questions(cls, lesson_id: Any) -> List[Question]:
        """
        Questions of a lesson in creation order.

        Raises:
            NotFoundError: Lesson not found
        """
        lesson = CourseService.get_lesson(lesson_id)
        return list(
            Question.objects.filter(lesson=lesson).order_by('sequence', 'created_at')
        )

    @classmethod
    def list_questions(cls) -> QuerySet:
        return Question.objects.select_related('lesson', 'course').order_by('lesson_id', 'sequence', 'created_at')

