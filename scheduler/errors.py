class SchedulerError(Exception):
    """Base class for review scheduler failures."""


class NotFoundError(SchedulerError):
    pass


class QuizNotFoundError(NotFoundError):
    def __init__(self, quiz_id):
        super().__init__(f"Quiz {quiz_id} not found")
        self.quiz_id = quiz_id


class QuestionNotFoundError(NotFoundError):
    def __init__(self, quiz_id, question_ids):
        missing = ", ".join(str(q) for q in question_ids)
        super().__init__(f"Questions not found in quiz {quiz_id}: {missing}")
        self.quiz_id = quiz_id
        self.question_ids = list(question_ids)


class DuplicateScheduleError(SchedulerError):
    """An insert hit the (user, quiz, question) uniqueness constraint."""
