import json
import os

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import User
from quizzes.models import Question, Quiz


class Command(BaseCommand):
    help = "Load demo quizzes and demo users from a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file",
            default="demo_quizzes.json",
            help="JSON file to load quizzes from (relative names resolve next to this command)",
        )
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete existing quizzes (and their review schedules) first",
        )

    def handle(self, *args, **options):
        file_name = options["file"]
        json_file_path = file_name
        if not os.path.isabs(file_name):
            json_file_path = os.path.join(os.path.dirname(__file__), file_name)

        try:
            with open(json_file_path, encoding="utf-8") as json_file:
                data = json.load(json_file)
        except (OSError, ValueError) as e:
            raise CommandError(f"Error loading data from {file_name}: {e}")

        with transaction.atomic():
            if options["reset"]:
                Quiz.objects.all().delete()
                self.stdout.write(self.style.SUCCESS("All existing quizzes have been deleted"))

            created = 0
            for entry in data.get("quizzes", []):
                quiz, was_created = Quiz.objects.get_or_create(
                    title=entry["title"],
                    defaults={"category": entry.get("category", "")},
                )
                if not was_created:
                    continue
                Question.objects.bulk_create(
                    Question(
                        quiz=quiz,
                        text=q["text"],
                        options=q.get("options", []),
                        correct_answer=q["correct_answer"],
                        difficulty=q.get("difficulty", Question.Difficulty.MEDIUM),
                        position=position,
                    )
                    for position, q in enumerate(entry.get("questions", []))
                )
                created += 1

            for username in data.get("users", []):
                if not User.objects.filter(username=username).exists():
                    User.objects.create_user(
                        username,
                        email=f"{username}@example.com",
                        password="testpassword",
                    )

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {created} quizzes from {file_name}")
        )
