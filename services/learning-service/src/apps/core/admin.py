from django.contrib import admin
from .models import Course, Lesson, Question, QuizAttempt


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'price', 'created_at']
    list_filter = ['category']
    search_fields = ['title', 'description']
    ordering = ['-created_at']


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ['title', 'course', 'has_media', 'created_at']
    search_fields = ['title']
    ordering = ['course', '-created_at']


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['question_text', 'lesson', 'sequence', 'correct_answer']
    search_fields = ['question_text']
    ordering = ['lesson', 'sequence']
    readonly_fields = ['sequence', 'created_at', 'updated_at']


@admin.register(QuizAttempt)
class QuizAttemptAdmin(admin.ModelAdmin):
    list_display = ['user_id', 'lesson_id', 'score', 'passed', 'created_at']
    list_filter = ['passed']
    search_fields = ['user_id']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
