import uuid

import structlog
from django.shortcuts import get_object_or_404
from rest_framework import views
from rest_framework.response import Response

from scheduler.services.cache import invalidate_due_reviews
from scheduler.services.reviews import schedule_quiz_for_user
from .models import Quiz
from .serializers import QuizSerializer

base_logger = structlog.get_logger()


class QuizDetailView(views.APIView):
    def get(self, request, quiz_id):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        quiz = get_object_or_404(Quiz.objects.prefetch_related("questions"), pk=quiz_id)

        # Opening a quiz puts its questions into the caller's review rotation
        if request.user.is_authenticated:
            schedule_quiz_for_user(request.user.pk, quiz.pk)
            invalidate_due_reviews(request.user.pk)

        logger.info(
            "quiz_api_response",
            quiz_id=str(quiz.pk),
            user_id=str(request.user.pk) if request.user.is_authenticated else None,
            question_count=len(quiz.questions.all()),
        )
        return Response(QuizSerializer(quiz).data)
