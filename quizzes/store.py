"""Read-side lookups the review scheduler uses against quizzes and questions."""

from collections import defaultdict

from .models import Question, Quiz


def get_quiz(quiz_id):
    """Return the quiz or raise ``Quiz.DoesNotExist``."""
    return Quiz.objects.get(pk=quiz_id)


def get_question_ids(quiz_id):
    """Question ids of a quiz in presentation order."""
    return list(
        Question.objects.filter(quiz_id=quiz_id)
        .order_by("position", "id")
        .values_list("id", flat=True)
    )


def resolve_questions(pairs):
    """
    Map each ``(quiz_id, question_id)`` pair to its Question.

    A question only resolves within the quiz it is paired with; pairs whose
    question is gone (or now belongs to another quiz) are absent from the
    result.
    """
    wanted = defaultdict(set)
    for quiz_id, question_id in pairs:
        wanted[quiz_id].add(question_id)
    if not wanted:
        return {}

    question_ids = set().union(*wanted.values())
    found = {}
    for question in Question.objects.filter(
        quiz_id__in=wanted.keys(), id__in=question_ids
    ):
        if question.id in wanted[question.quiz_id]:
            found[(question.quiz_id, question.id)] = question
    return found
