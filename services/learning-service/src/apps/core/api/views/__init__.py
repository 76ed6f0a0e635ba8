# services/learning-service/src/apps/core/api/views/__init__.py
"""
Learning Service API Views
"""

from .course_views import CourseViewSet, LessonViewSet
from .question_views import QuestionViewSet
from .quiz_views import QuizViewSet
from .result_views import ResultViewSet
from .certificate_views import CertificateView

__all__ = [
    'CourseViewSet',
    'LessonViewSet',
    'QuestionViewSet',
    'QuizViewSet',
    'ResultViewSet',
    'CertificateView',
]
