import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from quizzes.models import Question, Quiz


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="alice")


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(username="bob")


@pytest.fixture
def quiz(db):
    quiz = Quiz.objects.create(title="World Capitals", category="Geography")
    for position, (text, answer) in enumerate(
        [
            ("Capital of Australia?", "Canberra"),
            ("Capital of Canada?", "Ottawa"),
            ("Capital of Mongolia?", "Ulaanbaatar"),
        ]
    ):
        Question.objects.create(
            quiz=quiz,
            text=text,
            options=[answer, "Other"],
            correct_answer=answer,
            position=position,
        )
    return quiz


@pytest.fixture
def question_ids(quiz):
    return [q.id for q in quiz.questions.order_by("position")]
