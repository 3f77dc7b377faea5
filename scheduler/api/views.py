from rest_framework import views, status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
import structlog
import uuid
from ..errors import NotFoundError
from ..services.cache import (
    cache_due_reviews,
    get_cached_due_reviews,
    invalidate_due_reviews,
)
from ..services.reviews import get_due_reviews, update_review
from ..utils.time import to_utc_iso
from .serializers import (
    DueReviewSerializer,
    ReviewScheduleSerializer,
    ReviewUpdateSerializer,
    quality_label,
)

base_logger = structlog.get_logger()


class DueReviewsView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)
        user_id = request.user.pk

        payload = get_cached_due_reviews(user_id)
        cached = payload is not None
        if not cached:
            reviews = get_due_reviews(user_id)
            payload = {
                "count": len(reviews),
                "reviews": DueReviewSerializer(reviews, many=True).data,
            }
            cache_due_reviews(user_id, payload)

        logger.info(
            "due_reviews_api_response",
            user_id=str(user_id),
            review_count=payload["count"],
            cached=cached,
        )
        return Response(payload)


class ReviewUpdateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = ReviewUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        user_id = request.user.pk
        quiz_id = s.validated_data["quiz_id"]
        question_id = s.validated_data["question_id"]
        quality = s.validated_data["quality"]

        try:
            sched = update_review(user_id, quiz_id, question_id, quality)
        except NotFoundError as exc:
            raise NotFound(str(exc))

        # Only a committed update clears the cached due list
        invalidate_due_reviews(user_id)

        logger.info(
            "review_update_api_response",
            user_id=str(user_id),
            quiz_id=str(quiz_id),
            question_id=str(question_id),
            quality=quality,
            interval_days=sched.interval,
            next_review_utc=to_utc_iso(sched.next_review_date),
            status=status.HTTP_200_OK,
        )

        data = dict(ReviewScheduleSerializer(sched).data)
        data["quality_label"] = quality_label(quality)
        return Response(data, status=status.HTTP_200_OK)
