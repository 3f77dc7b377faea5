from django.conf import settings
from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASINESS_FACTOR


class ReviewSchedule(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="review_schedules"
    )
    quiz = models.ForeignKey(
        "quizzes.Quiz", on_delete=models.CASCADE, related_name="review_schedules"
    )
    # Plain id, not a FK: removing a question from its quiz leaves the schedule orphaned
    question_id = models.UUIDField()
    easiness_factor = models.FloatField(default=DEFAULT_EASINESS_FACTOR)
    repetitions = models.PositiveIntegerField(default=0)
    interval = models.PositiveIntegerField(default=0)  # days
    next_review_date = models.DateTimeField(default=timezone.now)  # UTC
    last_reviewed_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        unique_together = (("user", "quiz", "question_id"),)
        indexes = [
            models.Index(fields=["user", "next_review_date"], name="schedule_user_due_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}/{self.quiz_id}/{self.question_id}"
