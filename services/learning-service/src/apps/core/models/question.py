# services/learning-service/src/apps/core/models/question.py
"""
Question Models

Multiple-choice quiz questions attached to a lesson.
"""

import uuid
from typing import Any, Dict, List

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Max

from .course import Course, Lesson

OPTION_COUNT = 4
MIN_QUESTION_LENGTH = 5
MAX_OPTION_LENGTH = 500


def validate_question_content(
    question_text: Any,
    options: Any,
    correct_answer: Any
) -> Dict[str, List[str]]:
    """
    Check the content rules of a multiple-choice question.

    Returns a mapping of field name to error messages; an empty mapping
    means the question is valid. Used for both creation and updates.
    """
    errors: Dict[str, List[str]] = {}

    if not isinstance(question_text, str) or len(question_text.strip()) < MIN_QUESTION_LENGTH:
        errors.setdefault('question_text', []).append(
            f'Question must be at least {MIN_QUESTION_LENGTH} characters long'
        )

    if not isinstance(options, (list, tuple)) or len(options) != OPTION_COUNT:
        errors.setdefault('options', []).append(
            f'Options must be an array of exactly {OPTION_COUNT} strings'
        )
    elif not all(isinstance(option, str) and option.strip() for option in options):
        errors.setdefault('options', []).append('All options must be non-empty strings')
    elif any(len(option) > MAX_OPTION_LENGTH for option in options):
        errors.setdefault('options', []).append(
            f'Options must be at most {MAX_OPTION_LENGTH} characters long'
        )
    elif len({option.strip().lower() for option in options}) != len(options):
        errors.setdefault('options', []).append('All options must be unique')

    if not isinstance(correct_answer, str) or not correct_answer:
        errors.setdefault('correct_answer', []).append('Correct answer is required')
    elif 'options' not in errors and correct_answer not in options:
        errors.setdefault('correct_answer', []).append(
            'Correct answer must be one of the provided options'
        )

    return errors


class Question(models.Model):
    """
    Question model.

    A single multiple-choice item with four options, one of which is correct.
    Questions of a lesson are presented and graded in creation order.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='questions'
    )
    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name='questions'
    )

    question_text = models.TextField()
    options = models.JSONField(default=list)
    # Example: ["Confidentiality", "Control", "Compliance", "Cost"]
    correct_answer = models.CharField(max_length=MAX_OPTION_LENGTH)

    # Creation order within the lesson; breaks created_at ties.
    # Assigned on first save when left unset.
    sequence = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'questions'
        ordering = ['sequence', 'created_at']
        indexes = [
            models.Index(fields=['course', 'lesson']),
            models.Index(fields=['lesson', 'sequence']),
        ]

    def __str__(self):
        return f"{self.question_text[:50]}..."

    def save(self, *args, **kwargs):
        if self._state.adding and not self.sequence:
            last_sequence = Question.objects.filter(lesson_id=self.lesson_id).aggregate(
                last=Max('sequence')
            )['last']
            self.sequence = (last_sequence or 0) + 1
        super().save(*args, **kwargs)

    def clean(self):
        errors = validate_question_content(
            self.question_text,
            self.options,
            self.correct_answer
        )
        if self.lesson_id and self.course_id and self.lesson.course_id != self.course_id:
            errors.setdefault('lesson', []).append(
                'Lesson does not belong to the specified course'
            )
        if errors:
            raise ValidationError(errors)

    def is_correct_answer(self, answer: Any) -> bool:
        """Exact string comparison, no trimming or case folding."""
        return self.correct_answer == answer
