# services/learning-service/src/apps/core/api/views/course_views.py
"""
Course Views

ViewSets for course and lesson API endpoints.
"""

from django_filters import rest_framework as filters
from rest_framework import viewsets, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from common.permissions import IsAdmin, IsAdminOrReadOnly

from ...models import Course
from ...services import CourseService, NotFoundError
from ..serializers import (
    CourseSerializer,
    CourseCreateSerializer,
    LessonSerializer,
    LessonCreateSerializer,
    LessonUpdateSerializer,
)


class CourseFilter(filters.FilterSet):
    """Filter for the course catalog."""

    category = filters.CharFilter(lookup_expr='iexact')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    class Meta:
        model = Course
        fields = ['category']


class CourseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the course catalog.

    Listing and reading courses is public; creating and deleting is
    reserved to admins.
    """

    http_method_names = ['get', 'post', 'delete', 'head', 'options']
    filterset_class = CourseFilter
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'title', 'price']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [AllowAny()]
        return [IsAdmin()]

    def get_queryset(self):
        return CourseService.list_courses()

    def get_serializer_class(self):
        if self.action == 'create':
            return CourseCreateSerializer
        return CourseSerializer

    def retrieve(self, request, *args, **kwargs):
        course = CourseService.get_course(kwargs['pk'])
        return Response(CourseSerializer(course).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        course = CourseService.create_course(serializer.validated_data)

        return Response(
            CourseSerializer(course).data,
            status=status.HTTP_201_CREATED
        )

    def destroy(self, request, *args, **kwargs):
        CourseService.delete_course(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


class LessonViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the lessons of a course.

    Nested under /courses/{course_pk}/lessons/. Admins may attach a video
    and a PDF as multipart uploads.
    """

    permission_classes = [IsAdminOrReadOnly]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    serializer_class = LessonSerializer

    def get_queryset(self):
        return CourseService.get_course_lessons(self.kwargs['course_pk'])

    def _get_lesson(self):
        lesson = CourseService.get_lesson(self.kwargs['pk'])
        course = CourseService.get_course(self.kwargs['course_pk'])
        if lesson.course_id != course.id:
            raise NotFoundError('Lesson', lesson.id)
        return lesson

    def retrieve(self, request, *args, **kwargs):
        return Response(LessonSerializer(self._get_lesson()).data)

    def create(self, request, *args, **kwargs):
        serializer = LessonCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        lesson = CourseService.create_lesson(
            course_id=self.kwargs['course_pk'],
            title=serializer.validated_data['title'],
            video=serializer.validated_data.get('video'),
            pdf=serializer.validated_data.get('pdf'),
        )

        return Response(
            LessonSerializer(lesson).data,
            status=status.HTTP_201_CREATED
        )

    def partial_update(self, request, *args, **kwargs):
        lesson = self._get_lesson()
        serializer = LessonUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        lesson = CourseService.update_lesson(
            lesson_id=lesson.id,
            title=serializer.validated_data.get('title'),
            video=serializer.validated_data.get('video'),
            pdf=serializer.validated_data.get('pdf'),
        )

        return Response(LessonSerializer(lesson).data)

    def destroy(self, request, *args, **kwargs):
        lesson = self._get_lesson()
        CourseService.delete_lesson(lesson.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
