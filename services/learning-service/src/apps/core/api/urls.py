# services/learning-service/src/apps/core/api/urls.py
"""
Learning Service API URLs

URL routing configuration for REST API endpoints.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_nested import routers

from .views import (
    CourseViewSet,
    LessonViewSet,
    QuestionViewSet,
    QuizViewSet,
    ResultViewSet,
    CertificateView,
)

app_name = 'learning'

# Main router
router = DefaultRouter()
router.register(r'courses', CourseViewSet, basename='course')
router.register(r'questions', QuestionViewSet, basename='question')
router.register(r'quizzes', QuizViewSet, basename='quiz')
router.register(r'results', ResultViewSet, basename='result')

# Nested routers for courses
courses_router = routers.NestedDefaultRouter(router, r'courses', lookup='course')
courses_router.register(r'lessons', LessonViewSet, basename='course-lesson')

urlpatterns = [
    path('', include(router.urls)),
    path('', include(courses_router.urls)),
    path(
        'certificates/<str:user_id>/<str:course_id>/',
        CertificateView.as_view(),
        name='certificate'
    ),
]

# API URL Patterns Summary:
#
# Courses:
#   GET/POST      /api/v1/learning/courses/
#   GET/DEL       /api/v1/learning/courses/{id}/
#   GET/POST      /api/v1/learning/courses/{course_pk}/lessons/
#   GET/PATCH/DEL /api/v1/learning/courses/{course_pk}/lessons/{id}/
#
# Questions (admin):
#   GET/POST          /api/v1/learning/questions/
#   GET/PUT/PATCH/DEL /api/v1/learning/questions/{id}/
#
# Quizzes:
#   GET   /api/v1/learning/quizzes/{lesson_id}/
#   POST  /api/v1/learning/quizzes/submit/
#
# Results:
#   GET   /api/v1/learning/results/
#   GET   /api/v1/learning/results/{user_id}/
#
# Certificates:
#   GET   /api/v1/learning/certificates/{user_id}/{course_id}/
