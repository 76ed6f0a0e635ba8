# services/learning-service/src/apps/core/services/course_service.py
"""
Course Service

Course catalog and lesson management, plus the lesson lookups used by
grading, progress and certificate evaluation.
"""

import uuid
import logging
from typing import Any, Dict, Iterable, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import Count, QuerySet

from common.validators import validate_uuid

from ..models import Course, Lesson
from .exceptions import (
    InvalidInputError,
    NotFoundError,
    StorageFailureError,
)
from .media_service import MediaKind, MediaStorageService

logger = logging.getLogger(__name__)


def parse_uuid(value: Any, field_name: str) -> uuid.UUID:
    """Convert an identifier to UUID, raising InvalidInputError when malformed."""
    try:
        return validate_uuid(value, field_name)
    except DjangoValidationError:
        raise InvalidInputError(f"Invalid {field_name}: {value}", field=field_name)


class CourseService:
    """
    Service class for courses and lessons.
    """

    # ==========================================================================
    # Courses
    # ==========================================================================

    @classmethod
    def list_courses(cls) -> QuerySet:
        """Courses with their lesson counts, newest first."""
        return Course.objects.annotate(total_lessons=Count('lessons')).order_by('-created_at')

    @classmethod
    def get_course(cls, course_id: Any) -> Course:
        """
        Get a course by ID.

        Raises:
            InvalidInputError: Malformed course id
            NotFoundError: Course does not exist
        """
        course_uuid = parse_uuid(course_id, 'course_id')
        try:
            return Course.objects.get(id=course_uuid)
        except Course.DoesNotExist:
            raise NotFoundError('Course', course_uuid)

    @classmethod
    @transaction.atomic
    def create_course(cls, data: Dict[str, Any]) -> Course:
        course = Course.objects.create(**data)
        logger.info(f"Course {course.id} created: {course.title}")
        return course

    @classmethod
    @transaction.atomic
    def delete_course(cls, course_id: Any) -> None:
        """Delete a course; its lessons and questions go with it."""
        course = cls.get_course(course_id)
        course.delete()
        logger.info(f"Course {course_id} deleted")

    # ==========================================================================
    # Lessons
    # ==========================================================================

    @classmethod
    def get_lesson(cls, lesson_id: Any) -> Lesson:
        """
        Get a lesson by ID with its course.

        Raises:
            InvalidInputError: Malformed lesson id
            NotFoundError: Lesson does not exist
        """
        lesson_uuid = parse_uuid(lesson_id, 'lesson_id')
        try:
            return Lesson.objects.select_related('course').get(id=lesson_uuid)
        except Lesson.DoesNotExist:
            raise NotFoundError('Lesson', lesson_uuid)

    @classmethod
    def get_course_lessons(cls, course_id: Any) -> QuerySet:
        """Lessons of a course, newest first."""
        course = cls.get_course(course_id)
        return Lesson.objects.filter(course=course).select_related('course').order_by('-created_at')

    @classmethod
    def resolve_lessons(cls, lesson_ids: Iterable[Any]) -> Dict[str, Lesson]:
        """
        Bulk lookup of lessons with their courses, keyed by string id.

        Unknown or malformed ids are left out of the result.
        """
        valid_ids = set()
        for lesson_id in lesson_ids:
            try:
                valid_ids.add(validate_uuid(lesson_id, 'lesson_id'))
            except DjangoValidationError:
                logger.warning(f"Skipping malformed lesson id: {lesson_id}")

        if not valid_ids:
            return {}

        try:
            lessons = Lesson.objects.filter(id__in=valid_ids).select_related('course')
            return {str(lesson.id): lesson for lesson in lessons}
        except DatabaseError as e:
            logger.error(f"Failed to resolve lessons: {e}")
            raise StorageFailureError("Failed to load lessons") from e

    @classmethod
    @transaction.atomic
    def create_lesson(
        cls,
        course_id: Any,
        title: str,
        video: Any = None,
        pdf: Any = None,
        media_service: MediaStorageService = None,
    ) -> Lesson:
        """
        Create a lesson, uploading any attached video and PDF first.
        """
        course = cls.get_course(course_id)
        if not title or not title.strip():
            raise InvalidInputError("Lesson title is required", field='title')

        media_service = media_service or MediaStorageService()
        video_url = cls._upload(media_service, video, MediaKind.VIDEO)
        pdf_url = cls._upload(media_service, pdf, MediaKind.PDF)

        lesson = Lesson.objects.create(
            course=course,
            title=title.strip(),
            video_url=video_url,
            pdf_url=pdf_url,
        )
        logger.info(f"Lesson {lesson.id} created in course {course.id}")
        return lesson

    @classmethod
    @transaction.atomic
    def update_lesson(
        cls,
        lesson_id: Any,
        title: str = None,
        video: Any = None,
        pdf: Any = None,
        media_service: MediaStorageService = None,
    ) -> Lesson:
        """
        Update a lesson title and/or replace its uploads.
        """
        lesson = cls.get_lesson(lesson_id)
        update_fields = ['updated_at']

        if title is not None:
            if not title.strip():
                raise InvalidInputError("Lesson title is required", field='title')
            lesson.title = title.strip()
            update_fields.append('title')

        if video is not None or pdf is not None:
            media_service = media_service or MediaStorageService()
            if video is not None:
                lesson.video_url = cls._upload(media_service, video, MediaKind.VIDEO)
                update_fields.append('video_url')
            if pdf is not None:
                lesson.pdf_url = cls._upload(media_service, pdf, MediaKind.PDF)
                update_fields.append('pdf_url')

        lesson.save(update_fields=update_fields)
        logger.info(f"Lesson {lesson.id} updated: {update_fields}")
        return lesson

    @classmethod
    @transaction.atomic
    def delete_lesson(cls, lesson_id: Any) -> None:
        lesson = cls.get_lesson(lesson_id)
        lesson.delete()
        logger.info(f"Lesson {lesson_id} deleted")

    @staticmethod
    def _upload(media_service: MediaStorageService, upload: Any, kind: str) -> Optional[str]:
        if upload is None:
            return None
        return media_service.upload(
            upload,
            kind,
            getattr(upload, 'name', ''),
            getattr(upload, 'content_type', None),
        )
