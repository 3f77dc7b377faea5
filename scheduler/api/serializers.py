from rest_framework import serializers

from quizzes.serializers import QuestionSerializer, QuizSummarySerializer
from ..config import MAX_QUALITY
from ..data.models import ReviewSchedule
from ..domain.enums import QUALITY_LABELS, Quality

class ReviewUpdateSerializer(serializers.Serializer):
    quiz_id = serializers.UUIDField()
    question_id = serializers.UUIDField()
    quality = serializers.IntegerField(min_value=0, max_value=MAX_QUALITY)

class ReviewScheduleSerializer(serializers.ModelSerializer):
    quiz_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = ReviewSchedule
        fields = [
            "id",
            "quiz_id",
            "question_id",
            "easiness_factor",
            "repetitions",
            "interval",
            "next_review_date",
            "last_reviewed_date",
        ]

class DueReviewSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="schedule.id")
    quiz = QuizSummarySerializer()
    question_id = serializers.UUIDField(source="schedule.question_id")
    question = QuestionSerializer(allow_null=True)
    easiness_factor = serializers.FloatField(source="schedule.easiness_factor")
    repetitions = serializers.IntegerField(source="schedule.repetitions")
    interval = serializers.IntegerField(source="schedule.interval")
    next_review_date = serializers.DateTimeField(source="schedule.next_review_date")
    last_reviewed_date = serializers.DateTimeField(
        source="schedule.last_reviewed_date", allow_null=True
    )

def quality_label(quality):
    return QUALITY_LABELS[Quality(quality)]
