# services/learning-service/src/apps/core/api/serializers/quiz_serializers.py
"""
Quiz Serializers

Serializers for quiz submission, results and certificates.
"""

from rest_framework import serializers


class QuizSubmitSerializer(serializers.Serializer):
    """
    Quiz submission.

    ``answers`` is either a list of strings in question order or a list of
    ``{"question_id": ..., "answer": ...}`` objects.
    """

    lesson_id = serializers.CharField()
    answers = serializers.JSONField()
    time_taken_seconds = serializers.IntegerField(
        required=False,
        allow_null=True,
        min_value=0
    )


class AnswerDetailSerializer(serializers.Serializer):
    question_id = serializers.UUIDField()
    question = serializers.CharField()
    options = serializers.ListField(child=serializers.CharField())
    user_answer = serializers.CharField(allow_null=True)
    correct_answer = serializers.CharField()
    is_correct = serializers.BooleanField()


class AttemptReportSerializer(serializers.Serializer):
    """Graded submission returned to the learner."""

    attempt_id = serializers.UUIDField()
    lesson_id = serializers.UUIDField()
    course_id = serializers.UUIDField()
    total_questions = serializers.IntegerField()
    correct_answers = serializers.IntegerField()
    score = serializers.IntegerField()
    passed = serializers.BooleanField()
    details = AnswerDetailSerializer(many=True)
    created_at = serializers.DateTimeField()


class CertificateSerializer(serializers.Serializer):
    """Issued certificate."""

    user_id = serializers.UUIDField()
    course = serializers.DictField()
    overall_score = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        coerce_to_string=False
    )
    completion_date = serializers.DateTimeField()
    lessons_completed = serializers.IntegerField()
    total_lessons = serializers.IntegerField()
    lesson_scores = serializers.DictField(child=serializers.IntegerField())
    certificate_id = serializers.CharField()


class CertificateNotEligibleSerializer(serializers.Serializer):
    """Why a learner has not earned a certificate yet."""

    user_id = serializers.UUIDField()
    course_id = serializers.UUIDField()
    current_score = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        coerce_to_string=False
    )
    required_score = serializers.IntegerField()
    lessons_completed = serializers.IntegerField()
    total_lessons = serializers.IntegerField()
    lesson_scores = serializers.DictField(child=serializers.IntegerField())
    reason = serializers.CharField()
