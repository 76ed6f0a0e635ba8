# services/learning-service/src/apps/core/api/serializers/question_serializers.py
"""
Question Serializers

Admin serializers expose the correct answer; the learner serializer does not.
"""

from rest_framework import serializers

from ...models import Question


class QuestionSerializer(serializers.ModelSerializer):
    """Admin view of a question, including the correct answer."""

    lesson_id = serializers.UUIDField(read_only=True)
    course_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Question
        fields = [
            'id',
            'lesson_id',
            'course_id',
            'question_text',
            'options',
            'correct_answer',
            'sequence',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class LearnerQuestionSerializer(serializers.ModelSerializer):
    """Question as shown to a learner taking the quiz."""

    lesson_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Question
        fields = [
            'id',
            'lesson_id',
            'question_text',
            'options',
        ]
        read_only_fields = fields


class QuestionCreateSerializer(serializers.Serializer):
    """
    Input for creating a question.

    Only shapes are checked here; content rules are enforced by the
    question service so create and update share them.
    """

    lesson_id = serializers.CharField()
    course_id = serializers.CharField(required=False, allow_null=True)
    question_text = serializers.CharField(trim_whitespace=False, allow_blank=True)
    options = serializers.ListField(
        child=serializers.CharField(trim_whitespace=False, allow_blank=True)
    )
    correct_answer = serializers.CharField(trim_whitespace=False, allow_blank=True)


class QuestionUpdateSerializer(serializers.Serializer):
    """Input for updating a question. Omitted fields keep their value."""

    question_text = serializers.CharField(
        trim_whitespace=False,
        allow_blank=True,
        required=False
    )
    options = serializers.ListField(
        child=serializers.CharField(trim_whitespace=False, allow_blank=True),
        required=False
    )
    correct_answer = serializers.CharField(
        trim_whitespace=False,
        allow_blank=True,
        required=False
    )
