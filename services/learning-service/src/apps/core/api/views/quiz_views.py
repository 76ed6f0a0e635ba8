# services/learning-service/src/apps/core/api/views/quiz_views.py
"""
Quiz Views

Learner-facing quiz endpoints: fetch the questions of a lesson and submit
answers for grading.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ...services import GradingService, QuestionService, ResultService
from ..serializers import (
    AttemptReportSerializer,
    LearnerQuestionSerializer,
    QuizSubmitSerializer,
)
from .base import PrincipalMixin


class QuizViewSet(PrincipalMixin, viewsets.ViewSet):
    """
    ViewSet for taking quizzes.

    GET  /quizzes/{lesson_id}/   questions without answers
    POST /quizzes/submit/        grade and record an attempt
    """

    permission_classes = [IsAuthenticated]
    lookup_field = 'lesson_id'

    def retrieve(self, request, lesson_id=None):
        questions = QuestionService.get_lesson_questions(lesson_id)
        return Response({
            'lesson_id': lesson_id,
            'total_questions': len(questions),
            'questions': LearnerQuestionSerializer(questions, many=True).data,
        })

    @action(detail=False, methods=['post'])
    def submit(self, request):
        serializer = QuizSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        principal = self.get_principal()

        report = GradingService.grade(
            serializer.validated_data['lesson_id'],
            serializer.validated_data['answers'],
        )
        attempt = ResultService.record(
            principal.user_id,
            report,
            time_taken_seconds=serializer.validated_data.get('time_taken_seconds'),
        )

        data = report.to_dict()
        data['attempt_id'] = attempt.id
        data['created_at'] = attempt.created_at

        return Response(
            AttemptReportSerializer(data).data,
            status=status.HTTP_201_CREATED
        )
