# services/learning-service/src/apps/core/api/serializers/course_serializers.py
"""
Course Serializers

Serializers for course and lesson API endpoints.
"""

from rest_framework import serializers

from ...models import Course, Lesson


class CourseSerializer(serializers.ModelSerializer):
    """Serializer for course list and detail views."""

    total_lessons = serializers.SerializerMethodField()

    class Meta:
        model = Course
        fields = [
            'id',
            'title',
            'description',
            'thumbnail_url',
            'price',
            'category',
            'total_lessons',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_total_lessons(self, obj) -> int:
        annotated = getattr(obj, 'total_lessons', None)
        return annotated if annotated is not None else obj.lesson_count


class CourseCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating a course."""

    class Meta:
        model = Course
        fields = [
            'title',
            'description',
            'thumbnail_url',
            'price',
            'category',
        ]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value


class LessonSerializer(serializers.ModelSerializer):
    """Serializer for lesson views."""

    course_id = serializers.UUIDField(read_only=True)
    course_title = serializers.CharField(source='course.title', read_only=True)
    has_media = serializers.ReadOnlyField()

    class Meta:
        model = Lesson
        fields = [
            'id',
            'course_id',
            'course_title',
            'title',
            'video_url',
            'pdf_url',
            'has_media',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class LessonCreateSerializer(serializers.Serializer):
    """Input for creating a lesson; uploads are optional."""

    title = serializers.CharField(max_length=255)
    video = serializers.FileField(required=False, allow_null=True)
    pdf = serializers.FileField(required=False, allow_null=True)


class LessonUpdateSerializer(serializers.Serializer):
    """Input for updating a lesson title and/or replacing its uploads."""

    title = serializers.CharField(max_length=255, required=False)
    video = serializers.FileField(required=False, allow_null=True)
    pdf = serializers.FileField(required=False, allow_null=True)
