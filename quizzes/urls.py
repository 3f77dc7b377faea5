from django.urls import path
from .views import QuizDetailView

urlpatterns = [
    path("quizzes/<uuid:quiz_id>", QuizDetailView.as_view(), name="quiz-detail"),
]
