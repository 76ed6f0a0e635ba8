# services/learning-service/src/apps/core/models/course.py
"""
Course Models

Models for the course catalog and course lessons.
"""

import uuid
from decimal import Decimal

from django.db import models


class Course(models.Model):
    """
    Course model.

    A catalog entry grouping an ordered set of lessons.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    thumbnail_url = models.URLField(max_length=500, blank=True, default='')
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )
    category = models.CharField(max_length=100, blank=True, default='', db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'courses'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def lesson_count(self) -> int:
        return self.lessons.count()


class Lesson(models.Model):
    """
    Lesson model.

    Belongs to exactly one course and optionally carries a video and/or a
    PDF hosted by the media store.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='lessons'
    )

    title = models.CharField(max_length=255)
    video_url = models.URLField(max_length=1000, null=True, blank=True)
    pdf_url = models.URLField(max_length=1000, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'lessons'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['course', 'created_at']),
        ]

    def __str__(self):
        return f"{self.course.title} - {self.title}"

    @property
    def has_media(self) -> bool:
        return bool(self.video_url or self.pdf_url)
