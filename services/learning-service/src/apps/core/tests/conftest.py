# services/learning-service/src/apps/core/tests/conftest.py
"""
Pytest Configuration and Fixtures

Shared fixtures for learning service tests.
"""

import uuid
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from django.core.cache import cache
from django.utils import timezone

from common.authentication import Principal, TokenUser
from common.permissions import Roles


# =============================================================================
# Environment
# =============================================================================

@pytest.fixture(autouse=True)
def clear_cache():
    """Each test starts with an empty progress cache."""
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# UUID Fixtures
# =============================================================================

@pytest.fixture
def student_id():
    """Generate student ID."""
    return uuid.uuid4()


@pytest.fixture
def other_student_id():
    """Generate a second student ID."""
    return uuid.uuid4()


@pytest.fixture
def admin_id():
    """Generate admin ID."""
    return uuid.uuid4()


@pytest.fixture
def student_principal(student_id):
    return Principal(user_id=str(student_id), role=Roles.STUDENT)


@pytest.fixture
def admin_principal(admin_id):
    return Principal(user_id=str(admin_id), role=Roles.ADMIN)


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def course(db):
    """Create a course."""
    from apps.core.models import Course
    return Course.objects.create(
        title='Information Security Basics',
        description='Foundations of information security',
        category='Security',
    )


@pytest.fixture
def lesson(course):
    """Create a lesson in the course."""
    from apps.core.models import Lesson
    return Lesson.objects.create(course=course, title='The CIA Triad')


@pytest.fixture
def second_lesson(course):
    """Create a second lesson in the course."""
    from apps.core.models import Lesson
    return Lesson.objects.create(course=course, title='Access Control')


@pytest.fixture
def make_question():
    """Factory creating questions through the question service."""
    from apps.core.services import QuestionService

    def _make_question(lesson, correct='A', options=None, text=None):
        options = options or ['A', 'B', 'C', 'D']
        return QuestionService.create_question(
            lesson_id=lesson.id,
            question_text=text or f'Which option is {correct}?',
            options=options,
            correct_answer=correct,
        )

    return _make_question


@pytest.fixture
def quiz(lesson, make_question):
    """Four questions on the lesson with correct answers A, B, C, D."""
    return [make_question(lesson, correct=answer) for answer in ['A', 'B', 'C', 'D']]


@pytest.fixture
def make_attempt():
    """
    Factory storing a ledger row directly with a given score.

    Scores are expressed over 100 questions so any integer score is
    consistent with the stored counts.
    """
    from apps.core.models import QuizAttempt

    def _make_attempt(user_id, lesson, score, minutes_ago=None):
        attempt = QuizAttempt.objects.create(
            user_id=user_id,
            lesson_id=lesson.id,
            course_id=lesson.course_id,
            answers=['A'] * 100,
            total_questions=100,
            correct_answers=score,
            score=score,
            passed=score >= 70,
        )
        if minutes_ago is not None:
            created_at = timezone.now() - timedelta(minutes=minutes_ago)
            QuizAttempt.objects.filter(id=attempt.id).update(created_at=created_at)
            attempt.refresh_from_db()
        return attempt

    return _make_attempt


# =============================================================================
# API Client Fixtures
# =============================================================================

def _token_user(user_id, roles):
    return TokenUser({
        'sub': str(user_id),
        'email': f'{user_id}@learnwise.test',
        'roles': roles,
    })


@pytest.fixture
def api_client():
    """Get Django REST framework API client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def student_client(student_id):
    """API client authenticated as a student."""
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=_token_user(student_id, [Roles.STUDENT]))
    return client


@pytest.fixture
def admin_client(admin_id):
    """API client authenticated as an admin."""
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=_token_user(admin_id, [Roles.ADMIN]))
    return client


@pytest.fixture
def fake_s3_client():
    """boto3 S3 client double recording uploads."""
    return MagicMock()
