from dataclasses import dataclass

from django.db import transaction, IntegrityError

from ..config import DEFAULT_EASINESS_FACTOR
from ..errors import DuplicateScheduleError
from .models import ReviewSchedule

REVIEW_FIELDS = [
    "easiness_factor",
    "repetitions",
    "interval",
    "next_review_date",
    "last_reviewed_date",
]


@dataclass(frozen=True)
class ScheduleLookup:
    """Either the locked existing row (found=True) or an unsaved default."""

    schedule: ReviewSchedule
    found: bool


def new_schedule(user_id, quiz_id, question_id, now):
    return ReviewSchedule(
        user_id=user_id,
        quiz_id=quiz_id,
        question_id=question_id,
        easiness_factor=DEFAULT_EASINESS_FACTOR,
        repetitions=0,
        interval=0,
        next_review_date=now,
        last_reviewed_date=None,
    )


def find_schedule_for_update(user_id, quiz_id, question_id, now):
    """
    Fetch the schedule row and lock it until the surrounding transaction ends.
    Falls back to an unsaved default record when none exists yet.
    """
    try:
        sched = (ReviewSchedule.objects
                 .select_for_update()
                 .get(user_id=user_id, quiz_id=quiz_id, question_id=question_id))
        return ScheduleLookup(sched, True)
    except ReviewSchedule.DoesNotExist:
        return ScheduleLookup(new_schedule(user_id, quiz_id, question_id, now), False)


def schedule_exists(user_id, quiz_id, question_id):
    return ReviewSchedule.objects.filter(
        user_id=user_id, quiz_id=quiz_id, question_id=question_id
    ).exists()


def insert_schedule(sched):
    """
    Insert a single row in its own savepoint.
    Raises DuplicateScheduleError if the triple already exists.
    """
    try:
        with transaction.atomic():
            sched.save(force_insert=True)
    except IntegrityError as exc:
        if schedule_exists(sched.user_id, sched.quiz_id, sched.question_id):
            raise DuplicateScheduleError(str(sched)) from exc
        raise
    return sched


def insert_schedules(schedules):
    """
    Insert a batch in one statement. Any uniqueness clash aborts the whole
    batch with DuplicateScheduleError; nothing from the batch is kept.
    """
    try:
        with transaction.atomic():
            return ReviewSchedule.objects.bulk_create(schedules)
    except IntegrityError as exc:
        if any(
            schedule_exists(s.user_id, s.quiz_id, s.question_id) for s in schedules
        ):
            raise DuplicateScheduleError(f"{len(schedules)} schedules") from exc
        raise


def save_review(sched):
    sched.save(update_fields=REVIEW_FIELDS)
    return sched


def due_schedules(user_id, now):
    return (ReviewSchedule.objects
            .filter(user_id=user_id, next_review_date__lte=now)
            .select_related("quiz")
            .order_by("next_review_date", "id"))
