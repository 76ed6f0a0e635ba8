# services/learning-service/src/apps/core/api/views/question_views.py
"""
Question Views

Admin ViewSet for the question store.
"""

from django_filters import rest_framework as filters
from rest_framework import viewsets, status
from rest_framework.response import Response

from common.permissions import IsAdmin

from ...models import Question
from ...services import QuestionService
from ..serializers import (
    QuestionSerializer,
    QuestionCreateSerializer,
    QuestionUpdateSerializer,
)


class QuestionFilter(filters.FilterSet):
    """Filter for questions by lesson or course."""

    lesson_id = filters.UUIDFilter(field_name='lesson_id')
    course_id = filters.UUIDFilter(field_name='course_id')

    class Meta:
        model = Question
        fields = ['lesson_id', 'course_id']


class QuestionViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing quiz questions.

    Admin only; responses include the correct answer.
    """

    permission_classes = [IsAdmin]
    filterset_class = QuestionFilter
    search_fields = ['question_text']

    def get_queryset(self):
        return QuestionService.list_questions()

    def get_serializer_class(self):
        if self.action == 'create':
            return QuestionCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return QuestionUpdateSerializer
        return QuestionSerializer

    def retrieve(self, request, *args, **kwargs):
        question = QuestionService.get_question(kwargs['pk'])
        return Response(QuestionSerializer(question).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        question = QuestionService.create_question(**serializer.validated_data)

        return Response(
            QuestionSerializer(question).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        question = QuestionService.update_question(kwargs['pk'], **serializer.validated_data)

        return Response(QuestionSerializer(question).data)

    def destroy(self, request, *args, **kwargs):
        QuestionService.delete_question(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
