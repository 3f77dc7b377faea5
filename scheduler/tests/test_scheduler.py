import pytest
import logging
import uuid
from django.urls import reverse
from django.utils import timezone
from datetime import timedelta

from quizzes.models import Question
from scheduler.config import MAX_INTERVAL_DAYS
from scheduler.data.models import ReviewSchedule
from scheduler.services.cache import due_reviews_key, get_cached_due_reviews
from scheduler.services.reviews import create_initial_schedules

logger = logging.getLogger(__name__)

# Helpers

def make_review(client, username, quiz_id, question_id, quality):
    url = reverse("review-update")
    payload = {
        "quiz_id": str(quiz_id),
        "question_id": str(question_id),
        "quality": quality,
    }
    resp = client.post(
        url, data=payload, content_type="application/json", HTTP_X_USER_NAME=username
    )
    data = resp.json()
    logger.info(
        "POST /reviews/update quality=%s → status=%s interval=%s",
        quality,
        resp.status_code,
        data.get("interval"),
    )
    return resp


def get_due_reviews(client, username):
    url = reverse("due-reviews")
    resp = client.get(url, HTTP_X_USER_NAME=username)
    data = resp.json()
    logger.info(
        "GET /reviews → status=%s review_count=%s",
        resp.status_code,
        data.get("count"),
    )
    return resp


# Tests

@pytest.mark.django_db
def test_due_reviews_requires_authentication(client):
    resp = client.get(reverse("due-reviews"))

    assert resp.status_code == 401


@pytest.mark.django_db
def test_update_requires_authentication(client, quiz, question_ids):
    resp = client.post(
        reverse("review-update"),
        data={"quiz_id": str(quiz.pk), "question_id": str(question_ids[0]), "quality": 5},
        content_type="application/json",
    )

    assert resp.status_code == 401


@pytest.mark.django_db
def test_first_perfect_review(client, user, quiz, question_ids):
    """Fresh question rated 5 → 1 day, EF 2.6."""
    before = timezone.now()
    resp = make_review(client, user.username, quiz.pk, question_ids[0], 5)
    data = resp.json()

    assert resp.status_code == 200
    assert data["repetitions"] == 1
    assert data["interval"] == 1
    assert data["easiness_factor"] == pytest.approx(2.6)
    assert data["quality_label"] == "Easy"
    assert data["quiz_id"] == str(quiz.pk)
    assert data["question_id"] == str(question_ids[0])

    sched = ReviewSchedule.objects.get(user=user, question_id=question_ids[0])
    assert sched.last_reviewed_date >= before
    assert sched.next_review_date == sched.last_reviewed_date + timedelta(days=1)
    logger.info("✓ Passed: first perfect review scheduled for tomorrow")


@pytest.mark.django_db
def test_interval_ladder_then_lapse(client, user, quiz, question_ids):
    """1 → 6 → round(6 × EF) days, then a lapse drops back to 1."""
    intervals = []
    for _ in range(3):
        intervals.append(make_review(client, user.username, quiz.pk, question_ids[0], 5).json()["interval"])
    assert intervals == [1, 6, 17]

    lapsed = make_review(client, user.username, quiz.pk, question_ids[0], 1).json()
    assert lapsed["repetitions"] == 0
    assert lapsed["interval"] == 1
    assert lapsed["quality_label"] == "Forgot"
    assert 1.3 <= lapsed["easiness_factor"] < 2.8
    logger.info("✓ Passed: ladder %s then lapse", intervals)


@pytest.mark.django_db
def test_long_perfect_streak_stays_within_cap(client, user, quiz, question_ids):
    """Thirty perfect answers in a row keep succeeding with a capped interval."""
    for _ in range(30):
        resp = make_review(client, user.username, quiz.pk, question_ids[0], 5)
        assert resp.status_code == 200

    data = resp.json()
    assert data["repetitions"] == 30
    assert data["interval"] == MAX_INTERVAL_DAYS
    logger.info("✓ Passed: streak capped at %s days", data["interval"])


@pytest.mark.django_db
@pytest.mark.parametrize("quality", [-1, 6, "five"])
def test_quality_out_of_range_rejected(client, user, quiz, question_ids, quality):
    resp = make_review(client, user.username, quiz.pk, question_ids[0], quality)

    assert resp.status_code == 400
    assert "quality" in resp.json()
    assert ReviewSchedule.objects.count() == 0


@pytest.mark.django_db
def test_update_unknown_quiz_returns_404(client, user):
    resp = make_review(client, user.username, uuid.uuid4(), uuid.uuid4(), 5)

    assert resp.status_code == 404


@pytest.mark.django_db
def test_due_reviews_include_question_content(client, user, quiz, question_ids):
    create_initial_schedules(user.pk, quiz.pk, question_ids)

    resp = get_due_reviews(client, user.username)
    data = resp.json()

    assert resp.status_code == 200
    assert data["count"] == 3
    first = data["reviews"][0]
    assert first["quiz"] == {"id": str(quiz.pk), "title": quiz.title, "category": quiz.category}
    assert first["question"]["id"] == str(question_ids[0])
    assert first["question"]["correct_answer"] == "Canberra"
    assert first["question"]["options"] == ["Canberra", "Other"]
    assert first["repetitions"] == 0
    assert first["last_reviewed_date"] is None
    logger.info("✓ Passed: due reviews carry question content")


@pytest.mark.django_db
def test_due_reviews_excludes_future(client, user, quiz, question_ids):
    """Reviewed questions drop out of the due list until their next date."""
    create_initial_schedules(user.pk, quiz.pk, question_ids)
    make_review(client, user.username, quiz.pk, question_ids[0], 5)

    data = get_due_reviews(client, user.username).json()

    due_ids = [r["question_id"] for r in data["reviews"]]
    assert str(question_ids[0]) not in due_ids
    assert len(due_ids) == 2


@pytest.mark.django_db
def test_orphaned_schedule_reported_with_null_question(client, user, quiz, question_ids):
    create_initial_schedules(user.pk, quiz.pk, question_ids)
    Question.objects.filter(pk=question_ids[2]).delete()

    data = get_due_reviews(client, user.username).json()

    assert data["count"] == 3
    orphan = next(r for r in data["reviews"] if r["question_id"] == str(question_ids[2]))
    assert orphan["question"] is None


@pytest.mark.django_db
def test_due_list_is_cached_per_user(client, user, quiz, question_ids):
    create_initial_schedules(user.pk, quiz.pk, question_ids)
    get_due_reviews(client, user.username)

    assert get_cached_due_reviews(user.pk)["count"] == 3

    # Changes made behind the API are not visible until the cache is cleared
    ReviewSchedule.objects.filter(user=user).delete()
    assert get_due_reviews(client, user.username).json()["count"] == 3


@pytest.mark.django_db
def test_update_clears_cached_due_list(client, user, quiz, question_ids):
    """Cache invalidation: the next fetch reflects the update."""
    create_initial_schedules(user.pk, quiz.pk, question_ids)
    assert get_due_reviews(client, user.username).json()["count"] == 3

    make_review(client, user.username, quiz.pk, question_ids[0], 5)

    assert get_cached_due_reviews(user.pk) is None
    assert get_due_reviews(client, user.username).json()["count"] == 2
    logger.info("✓ Passed: update invalidated cached due list")


@pytest.mark.django_db
def test_failed_update_keeps_cache(client, user, quiz, question_ids):
    create_initial_schedules(user.pk, quiz.pk, question_ids)
    get_due_reviews(client, user.username)

    make_review(client, user.username, uuid.uuid4(), question_ids[0], 5)

    assert get_cached_due_reviews(user.pk) is not None


@pytest.mark.django_db
def test_update_does_not_clear_other_users_cache(client, user, other_user, quiz, question_ids):
    create_initial_schedules(other_user.pk, quiz.pk, question_ids)
    get_due_reviews(client, other_user.username)

    make_review(client, user.username, quiz.pk, question_ids[0], 5)

    assert get_cached_due_reviews(other_user.pk) is not None
    assert due_reviews_key(user.pk) != due_reviews_key(other_user.pk)


@pytest.mark.django_db
def test_opening_quiz_schedules_questions(client, user, quiz, question_ids):
    url = reverse("quiz-detail", kwargs={"quiz_id": str(quiz.pk)})

    resp = client.get(url, HTTP_X_USER_NAME=user.username)

    assert resp.status_code == 200
    assert [q["id"] for q in resp.json()["questions"]] == [str(q) for q in question_ids]
    assert ReviewSchedule.objects.filter(user=user, quiz=quiz).count() == 3

    # Opening it again does not duplicate anything
    client.get(url, HTTP_X_USER_NAME=user.username)
    assert ReviewSchedule.objects.filter(user=user, quiz=quiz).count() == 3
    logger.info("✓ Passed: quiz view scheduled questions once")


@pytest.mark.django_db
def test_opening_quiz_refreshes_cached_due_list(client, user, quiz):
    assert get_due_reviews(client, user.username).json()["count"] == 0

    client.get(reverse("quiz-detail", kwargs={"quiz_id": str(quiz.pk)}), HTTP_X_USER_NAME=user.username)

    assert get_due_reviews(client, user.username).json()["count"] == 3


@pytest.mark.django_db
def test_anonymous_quiz_view_schedules_nothing(client, quiz):
    resp = client.get(reverse("quiz-detail", kwargs={"quiz_id": str(quiz.pk)}))

    assert resp.status_code == 200
    assert ReviewSchedule.objects.count() == 0


@pytest.mark.django_db
def test_unknown_quiz_view_returns_404(client, user):
    resp = client.get(
        reverse("quiz-detail", kwargs={"quiz_id": str(uuid.uuid4())}),
        HTTP_X_USER_NAME=user.username,
    )

    assert resp.status_code == 404
