# services/learning-service/src/apps/core/models/attempt.py
"""
Quiz Attempt Models

Append-only ledger of graded quiz submissions.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class ImmutableAttemptError(Exception):
    """Raised when a stored attempt is modified or deleted."""


class QuizAttempt(models.Model):
    """
    Quiz attempt model.

    One row per submission. user, lesson and course are soft references:
    the lesson or course may be deleted later while the attempt is kept.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    user_id = models.UUIDField(db_index=True)
    lesson_id = models.UUIDField()
    course_id = models.UUIDField()

    # Digest of the ordered question ids the attempt was graded against
    quiz_set_key = models.CharField(max_length=64, blank=True, default='')

    answers = models.JSONField(default=list)
    total_questions = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )
    correct_answers = models.PositiveIntegerField()
    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    passed = models.BooleanField(default=False)
    time_taken_seconds = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'quiz_attempts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user_id', 'lesson_id']),
            models.Index(fields=['user_id', 'created_at']),
            models.Index(fields=['course_id']),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.lesson_id}: {self.score}%"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableAttemptError(f"Quiz attempt {self.id} cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableAttemptError(f"Quiz attempt {self.id} cannot be deleted")
