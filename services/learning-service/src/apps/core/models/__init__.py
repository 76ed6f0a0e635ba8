# services/learning-service/src/apps/core/models/__init__.py
"""
Learning Service Models
"""

from .course import Course, Lesson
from .question import Question, validate_question_content
from .attempt import QuizAttempt, ImmutableAttemptError

__all__ = [
    'Course',
    'Lesson',
    'Question',
    'validate_question_content',
    'QuizAttempt',
    'ImmutableAttemptError',
]
