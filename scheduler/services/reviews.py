import uuid
from dataclasses import dataclass
from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from quizzes import store as question_store
from quizzes.models import Question, Quiz
from ..data import repos
from ..data.models import ReviewSchedule
from ..domain.logic import schedule_next
from ..errors import DuplicateScheduleError, QuestionNotFoundError, QuizNotFoundError
from ..utils.time import to_utc_iso

logger = structlog.get_logger()


@dataclass(frozen=True)
class DueReview:
    schedule: ReviewSchedule
    quiz: Quiz
    question: Optional[Question]  # None when the question left its quiz


def _require_quiz(quiz_id):
    try:
        return question_store.get_quiz(quiz_id)
    except (Quiz.DoesNotExist, ValidationError):
        raise QuizNotFoundError(quiz_id)


def get_due_reviews(user_id, now=None):
    now = now or timezone.now()
    schedules = list(repos.due_schedules(user_id, now))
    questions = question_store.resolve_questions(
        (s.quiz_id, s.question_id) for s in schedules
    )

    reviews = [
        DueReview(
            schedule=s,
            quiz=s.quiz,
            question=questions.get((s.quiz_id, s.question_id)),
        )
        for s in schedules
    ]
    orphaned = sum(1 for r in reviews if r.question is None)
    logger.info("due_reviews_fetched",
        user_id=str(user_id),
        now_utc=to_utc_iso(now),
        due_count=len(reviews),
        orphaned_count=orphaned,
    )
    return reviews


def create_initial_schedules(user_id, quiz_id, question_ids, now=None):
    now = now or timezone.now()
    parsed, malformed = [], []
    for q in question_ids:
        try:
            parsed.append(uuid.UUID(str(q)))
        except ValueError:
            malformed.append(q)
    # Keep first occurrence order, drop repeats
    question_ids = list(dict.fromkeys(parsed))

    _require_quiz(quiz_id)

    known = set(question_store.get_question_ids(quiz_id))
    missing = malformed + [q for q in question_ids if q not in known]
    if missing:
        raise QuestionNotFoundError(quiz_id, missing)
    if not question_ids:
        return

    schedules = [
        repos.new_schedule(user_id, quiz_id, question_id, now)
        for question_id in question_ids
    ]

    with transaction.atomic():
        try:
            repos.insert_schedules(schedules)
            inserted = len(schedules)
        except DuplicateScheduleError:
            # Some already exist: insert the rest one by one
            inserted = 0
            for sched in schedules:
                try:
                    repos.insert_schedule(sched)
                    inserted += 1
                except DuplicateScheduleError:
                    continue

    logger.info("initial_schedules_created",
        user_id=str(user_id),
        quiz_id=str(quiz_id),
        requested=len(schedules),
        inserted=inserted,
    )


def schedule_quiz_for_user(user_id, quiz_id, now=None):
    """Schedule every question of the quiz for the user, in quiz order."""
    question_ids = question_store.get_question_ids(quiz_id)
    create_initial_schedules(user_id, quiz_id, question_ids, now=now)


def update_review(user_id, quiz_id, question_id, quality, now=None):
    now = now or timezone.now()
    logger.info("review_received",
        user_id=str(user_id),
        quiz_id=str(quiz_id),
        question_id=str(question_id),
        quality=quality,
    )

    try:
        sched = _apply_review(user_id, quiz_id, question_id, quality, now)
    except DuplicateScheduleError:
        # A concurrent first review created the row; apply on top of it
        sched = _apply_review(user_id, quiz_id, question_id, quality, now)

    logger.info("review_scheduled",
        user_id=str(user_id),
        quiz_id=str(quiz_id),
        question_id=str(question_id),
        easiness_factor=sched.easiness_factor,
        repetitions=sched.repetitions,
        interval_days=sched.interval,
        next_review_utc=to_utc_iso(sched.next_review_date),
    )
    return sched


def _apply_review(user_id, quiz_id, question_id, quality, now):
    with transaction.atomic():
        lookup = repos.find_schedule_for_update(user_id, quiz_id, question_id, now)
        sched = lookup.schedule
        if not lookup.found:
            _require_quiz(quiz_id)

        outcome = schedule_next(
            quality, sched.easiness_factor, sched.repetitions, sched.interval, now
        )
        sched.easiness_factor = outcome.easiness_factor
        sched.repetitions = outcome.repetitions
        sched.interval = outcome.interval
        sched.next_review_date = outcome.next_review_date
        sched.last_reviewed_date = now

        if lookup.found:
            repos.save_review(sched)
        else:
            repos.insert_schedule(sched)
    return sched
