# services/learning-service/src/apps/core/api/serializers/__init__.py
"""
Learning Service API Serializers
"""

from .course_serializers import (
    CourseSerializer,
    CourseCreateSerializer,
    LessonSerializer,
    LessonCreateSerializer,
    LessonUpdateSerializer,
)
from .question_serializers import (
    QuestionSerializer,
    LearnerQuestionSerializer,
    QuestionCreateSerializer,
    QuestionUpdateSerializer,
)
from .quiz_serializers import (
    QuizSubmitSerializer,
    AttemptReportSerializer,
    CertificateSerializer,
    CertificateNotEligibleSerializer,
)

__all__ = [
    'CourseSerializer',
    'CourseCreateSerializer',
    'LessonSerializer',
    'LessonCreateSerializer',
    'LessonUpdateSerializer',
    'QuestionSerializer',
    'LearnerQuestionSerializer',
    'QuestionCreateSerializer',
    'QuestionUpdateSerializer',
    'QuizSubmitSerializer',
    'AttemptReportSerializer',
    'CertificateSerializer',
    'CertificateNotEligibleSerializer',
]
