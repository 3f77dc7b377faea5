from rest_framework import serializers

from .models import Question, Quiz


class QuestionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Question
        fields = ["id", "text", "options", "correct_answer", "difficulty"]


class QuizSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Quiz
        fields = ["id", "title", "category"]


class QuizSerializer(serializers.ModelSerializer):
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta:
        model = Quiz
        fields = ["id", "title", "category", "questions"]
