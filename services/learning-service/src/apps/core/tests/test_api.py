# services/learning-service/src/apps/core/tests/test_api.py
"""
API Tests

Tests for learning service REST API endpoints.
"""

import uuid
from unittest.mock import patch

import pytest
from rest_framework import status

from apps.core.models import Course, Question, QuizAttempt

BASE_URL = '/api/v1/learning'


# =============================================================================
# Course API Tests
# =============================================================================

@pytest.mark.django_db
class TestCourseAPI:
    """Tests for course and lesson endpoints."""

    def test_list_courses_is_public(self, api_client, course, lesson):
        response = api_client.get(f'{BASE_URL}/courses/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['count'] == 1
        assert response.data['results'][0]['total_lessons'] == 1

    def test_filter_courses_by_category(self, api_client, course):
        Course.objects.create(title='Cooking', category='Lifestyle')

        response = api_client.get(f'{BASE_URL}/courses/', {'category': 'security'})

        assert [c['title'] for c in response.data['results']] == [course.title]

    def test_create_course_requires_admin(self, student_client):
        response = student_client.post(
            f'{BASE_URL}/courses/',
            {'title': 'Networking'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['success'] is False

    def test_create_course(self, admin_client):
        response = admin_client.post(
            f'{BASE_URL}/courses/',
            {'title': 'Networking', 'category': 'IT', 'price': '19.99'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['title'] == 'Networking'

    def test_get_missing_course(self, api_client, db):
        response = api_client.get(f'{BASE_URL}/courses/{uuid.uuid4()}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'NOT_FOUND'

    def test_delete_course(self, admin_client, course, lesson, quiz):
        response = admin_client.delete(f'{BASE_URL}/courses/{course.id}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Question.objects.count() == 0

    def test_list_lessons(self, student_client, course, lesson):
        response = student_client.get(f'{BASE_URL}/courses/{course.id}/lessons/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['title'] == lesson.title

    def test_create_lesson_with_pdf(self, admin_client, course):
        from django.core.files.uploadedfile import SimpleUploadedFile
        pdf = SimpleUploadedFile('notes.pdf', b'%PDF-1.4', content_type='application/pdf')

        with patch('apps.core.services.media_service.boto3') as mock_boto3:
            response = admin_client.post(
                f'{BASE_URL}/courses/{course.id}/lessons/',
                {'title': 'Reading', 'pdf': pdf},
                format='multipart'
            )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['pdf_url'].startswith('http://media.test/learning-test/learnwise/pdfs/')
        assert response.data['video_url'] is None
        mock_boto3.client.return_value.upload_fileobj.assert_called_once()

    def test_create_lesson_rejects_wrong_media_type(self, admin_client, course):
        from django.core.files.uploadedfile import SimpleUploadedFile
        video = SimpleUploadedFile('clip.txt', b'hello', content_type='text/plain')

        response = admin_client.post(
            f'{BASE_URL}/courses/{course.id}/lessons/',
            {'title': 'Recorded lecture', 'video': video},
            format='multipart'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'INVALID_INPUT'

    def test_update_lesson_title(self, admin_client, course, lesson):
        response = admin_client.patch(
            f'{BASE_URL}/courses/{course.id}/lessons/{lesson.id}/',
            {'title': 'Renamed'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Renamed'

    def test_lesson_under_wrong_course(self, student_client, lesson):
        other_course = Course.objects.create(title='Networking')

        response = student_client.get(
            f'{BASE_URL}/courses/{other_course.id}/lessons/{lesson.id}/'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Question API Tests
# =============================================================================

@pytest.mark.django_db
class TestQuestionAPI:
    """Tests for admin question endpoints."""

    def test_create_question(self, admin_client, course, lesson):
        response = admin_client.post(
            f'{BASE_URL}/questions/',
            {
                'lesson_id': str(lesson.id),
                'course_id': str(course.id),
                'question_text': 'What does the C in CIA stand for?',
                'options': ['Confidentiality', 'Control', 'Compliance', 'Cost'],
                'correct_answer': 'Confidentiality',
            },
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['correct_answer'] == 'Confidentiality'

    def test_create_question_duplicate_options(self, admin_client, lesson):
        response = admin_client.post(
            f'{BASE_URL}/questions/',
            {
                'lesson_id': str(lesson.id),
                'question_text': 'Pick the right option',
                'options': ['A', 'A', 'B', 'C'],
                'correct_answer': 'A',
            },
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'options' in response.data['error']['details']['errors']
        assert Question.objects.count() == 0

    def test_questions_require_admin(self, student_client, quiz):
        response = student_client.get(f'{BASE_URL}/questions/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_filter_questions_by_lesson(self, admin_client, lesson, second_lesson, quiz, make_question):
        make_question(second_lesson)

        response = admin_client.get(f'{BASE_URL}/questions/', {'lesson_id': str(lesson.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 4

    def test_patch_question(self, admin_client, lesson, make_question):
        question = make_question(lesson, correct='A')

        response = admin_client.patch(
            f'{BASE_URL}/questions/{question.id}/',
            {'correct_answer': 'C'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['correct_answer'] == 'C'

    def test_patch_question_invalid_answer(self, admin_client, lesson, make_question):
        question = make_question(lesson, correct='A')

        response = admin_client.patch(
            f'{BASE_URL}/questions/{question.id}/',
            {'correct_answer': 'Z'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_missing_question(self, admin_client, db):
        response = admin_client.delete(f'{BASE_URL}/questions/{uuid.uuid4()}/')
        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Quiz API Tests
# =============================================================================

@pytest.mark.django_db
class TestQuizAPI:
    """Tests for quiz taking endpoints."""

    def test_get_quiz_hides_answers(self, student_client, lesson, quiz):
        response = student_client.get(f'{BASE_URL}/quizzes/{lesson.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_questions'] == 4
        assert all('correct_answer' not in q for q in response.data['questions'])

    def test_quiz_requires_authentication(self, api_client, lesson, quiz):
        response = api_client.get(f'{BASE_URL}/quizzes/{lesson.id}/')
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_submit_quiz(self, student_client, student_id, lesson, quiz):
        response = student_client.post(
            f'{BASE_URL}/quizzes/submit/',
            {'lesson_id': str(lesson.id), 'answers': ['A', 'B', 'X', 'D']},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['correct_answers'] == 3
        assert response.data['score'] == 75
        assert response.data['passed'] is True
        assert len(response.data['details']) == 4

        attempt = QuizAttempt.objects.get(id=response.data['attempt_id'])
        assert attempt.user_id == student_id

    def test_submit_quiz_count_mismatch(self, student_client, lesson, make_question):
        make_question(lesson)

        response = student_client.post(
            f'{BASE_URL}/quizzes/submit/',
            {'lesson_id': str(lesson.id), 'answers': ['A', 'B']},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['details']['expected'] == 1
        assert QuizAttempt.objects.count() == 0

    def test_submit_quiz_without_questions(self, student_client, lesson):
        response = student_client.post(
            f'{BASE_URL}/quizzes/submit/',
            {'lesson_id': str(lesson.id), 'answers': ['A']},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['message'] == 'No quizzes found for this lesson'

    def test_submit_quiz_malformed_lesson(self, student_client, db):
        response = student_client.post(
            f'{BASE_URL}/quizzes/submit/',
            {'lesson_id': 'abc', 'answers': ['A']},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Result API Tests
# =============================================================================

@pytest.mark.django_db
class TestResultAPI:
    """Tests for progress endpoints."""

    def test_own_progress(self, student_client, student_id, lesson, make_attempt):
        make_attempt(student_id, lesson, 80)

        response = student_client.get(f'{BASE_URL}/results/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stats']['total_quizzes_taken'] == 1
        assert str(lesson.course_id) in response.data['results_by_course']

    def test_progress_by_user_id(self, student_client, student_id, lesson, make_attempt):
        make_attempt(student_id, lesson, 80)

        response = student_client.get(f'{BASE_URL}/results/{student_id}/')

        assert response.status_code == status.HTTP_200_OK

    def test_other_user_progress_forbidden(self, student_client, other_student_id):
        response = student_client.get(f'{BASE_URL}/results/{other_student_id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_reads_any_progress(self, admin_client, student_id, lesson, make_attempt):
        make_attempt(student_id, lesson, 80)

        response = admin_client.get(f'{BASE_URL}/results/{student_id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stats']['quizzes_passed'] == 1

    def test_submission_refreshes_progress(self, student_client, lesson, quiz):
        first = student_client.get(f'{BASE_URL}/results/')
        assert first.data['stats']['total_quizzes_taken'] == 0

        student_client.post(
            f'{BASE_URL}/quizzes/submit/',
            {'lesson_id': str(lesson.id), 'answers': ['A', 'B', 'C', 'D']},
            format='json'
        )
        second = student_client.get(f'{BASE_URL}/results/')

        assert second.data['stats']['total_quizzes_taken'] == 1


# =============================================================================
# Certificate API Tests
# =============================================================================

@pytest.mark.django_db
class TestCertificateAPI:
    """Tests for certificate endpoint."""

    def test_eligible(self, student_client, student_id, course, lesson, second_lesson, make_attempt):
        make_attempt(student_id, lesson, 80)

        response = student_client.get(f'{BASE_URL}/certificates/{student_id}/{course.id}/')

        assert response.status_code == status.HTTP_200_OK
        certificate = response.data['certificate']
        assert certificate['overall_score'] == 80
        assert certificate['lessons_completed'] == 1
        assert certificate['total_lessons'] == 2
        assert certificate['certificate_id'].startswith(f'CERT-{str(student_id)[-6:]}-')

    def test_not_eligible_returns_diagnostics(self, student_client, student_id, course, lesson, make_attempt):
        make_attempt(student_id, lesson, 50)

        response = student_client.get(f'{BASE_URL}/certificates/{student_id}/{course.id}/')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['eligible'] is False
        assert response.data['current_score'] == 50
        assert response.data['required_score'] == 70

    def test_no_attempts(self, student_client, student_id, course, lesson):
        response = student_client.get(f'{BASE_URL}/certificates/{student_id}/{course.id}/')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'NO_ATTEMPTS'

    def test_missing_course(self, student_client, student_id, db):
        response = student_client.get(f'{BASE_URL}/certificates/{student_id}/{uuid.uuid4()}/')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_other_user_forbidden(self, student_client, other_student_id, course):
        response = student_client.get(f'{BASE_URL}/certificates/{other_student_id}/{course.id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Health Tests
# =============================================================================

@pytest.mark.django_db
class TestHealthAPI:

    def test_liveness(self, api_client):
        response = api_client.get('/health/live/')
        assert response.status_code == status.HTTP_200_OK

    def test_readiness_reports_media_storage(self, api_client):
        with patch('apps.core.services.media_service.boto3') as mock_boto3:
            response = api_client.get('/health/ready/')

        assert response.status_code == status.HTTP_200_OK
        names = [check['name'] for check in response.data['checks']]
        assert names == ['database', 'cache', 'media_storage']
        mock_boto3.client.return_value.head_bucket.assert_called_once_with(Bucket='learning-test')

    def test_readiness_fails_when_storage_unreachable(self, api_client):
        with patch('apps.core.services.media_service.boto3') as mock_boto3:
            mock_boto3.client.return_value.head_bucket.side_effect = RuntimeError('connection refused')
            response = api_client.get('/health/ready/')

        assert response.status_code == 503
        assert response.data['checks'][-1]['status'] == 'unhealthy'


# =============================================================================
# Authentication Tests
# =============================================================================

@pytest.mark.django_db
class TestJWTAuthentication:
    """Requests authenticated with a bearer token instead of force_authenticate."""

    def test_bearer_token_identifies_caller(self, api_client, student_id, lesson, make_attempt):
        from common.authentication import JWTTokenGenerator
        make_attempt(student_id, lesson, 90)
        token = JWTTokenGenerator.generate_access_token(student_id, ['student'])

        response = api_client.get(
            f'{BASE_URL}/results/',
            HTTP_AUTHORIZATION=f'Bearer {token}'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_id'] == str(student_id)
        assert response.data['stats']['quizzes_passed'] == 1

    def test_invalid_token_rejected(self, api_client):
        response = api_client.get(
            f'{BASE_URL}/results/',
            HTTP_AUTHORIZATION='Bearer not-a-token'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_non_canonical_token_subject_reads_own_progress(self, student_id, lesson, make_attempt):
        from rest_framework.test import APIClient
        from common.authentication import TokenUser
        make_attempt(student_id, lesson, 80)
        client = APIClient()
        client.force_authenticate(user=TokenUser({
            'sub': student_id.hex.upper(),
            'roles': ['student'],
        }))

        response = client.get(f'{BASE_URL}/results/{student_id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stats']['total_quizzes_taken'] == 1


# =============================================================================
# Startup Tests
# =============================================================================

class TestServiceStartup:
    """The URLconf must load in a fresh interpreter, before DRF is imported."""

    def test_urlconf_loads_in_fresh_process(self):
        import os
        import subprocess
        import sys
        from django.conf import settings

        env = dict(
            os.environ,
            DJANGO_SETTINGS_MODULE='config.settings.testing',
            PYTHONPATH=os.pathsep.join([str(settings.BASE_DIR), str(settings.SHARED_DIR)]),
        )
        code = (
            "import django; django.setup(); "
            "from django.urls import resolve; "
            "print(resolve('/api/v1/learning/courses/').url_name)"
        )

        result = subprocess.run(
            [sys.executable, '-c', code],
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip().endswith('course-list')
