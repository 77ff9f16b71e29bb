from datetime import date

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.exams.models import Assessment, AssessmentSkill, Question, Skill
from students.models import Student

DEMO_STUDENTS = [
    ("Alice Johnson", "alice@example.com", "1234567890", 2023, date(2023, 1, 15), Student.Stream.COMPUTER_SCIENCE),
    ("Bob Smith", "bob@example.com", "2345678901", 2023, date(2023, 2, 20), Student.Stream.MECHANICAL),
    ("Charlie Brown", "charlie@example.com", "3456789012", 2024, date(2023, 3, 10), Student.Stream.COMPUTER_SCIENCE),
    ("Diana Prince", "diana@example.com", "4567890123", 2024, date(2023, 4, 5), Student.Stream.ELECTRICAL),
]

DEMO_QUESTIONS = {
    "Basic Arithmetic": (
        "Questions involving addition, subtraction, multiplication, and division.",
        [
            ("What is 15 + 27?", "choice", {"options": ["32", "42", "45", "52"], "correct_option": 2}),
            ("What is 12 * 8?", "choice", {"options": ["96", "108", "84", "112"], "correct_option": 1}),
            ("What is 100 / 4?", "choice", {"options": ["20", "30", "25", "35"], "correct_option": 3}),
            ("Calculate the sum of the first 10 positive integers.", "answer", {"expected_answer": "55"}),
        ],
    ),
    "Logical Reasoning": (
        "Questions that test logical thinking and problem-solving abilities.",
        [
            (
                "Which number should come next in the pattern? 1, 4, 9, 16, ?",
                "choice",
                {"options": ["20", "25", "30", "36"], "correct_option": 2},
            ),
            (
                "If all Bloops are Razzies and all Razzies are Lazzies, "
                "are all Bloops definitely Lazzies?",
                "choice",
                {"options": ["Yes", "No", "Cannot be determined", "Maybe"], "correct_option": 1},
            ),
            (
                "A man is looking at a portrait. Someone asks him whose portrait he is "
                "looking at. He replies, \"Brothers and sisters I have none, but that "
                "man's father is my father's son.\" Who is in the portrait?",
                "answer",
                {"expected_answer": "His son"},
            ),
        ],
    ),
}


class Command(BaseCommand):
    help = "Seed demo students, skills, questions and an assessment"

    @transaction.atomic
    def handle(self, *args, **options):
        for name, email, mobile, year_of_pass, registered, stream in DEMO_STUDENTS:
            Student.objects.get_or_create(
                email=email,
                defaults={
                    "name": name,
                    "mobile": mobile,
                    "year_of_pass": year_of_pass,
                    "date_of_registration": registered,
                    "stream": stream,
                },
            )

        skills = []
        for skill_name, (description, questions) in DEMO_QUESTIONS.items():
            skill, created = Skill.objects.get_or_create(
                name=skill_name, defaults={"description": description}
            )
            skills.append(skill)
            if not created:
                continue
            for text, question_type, payload in questions:
                Question.objects.create(
                    skill=skill, question=text, type=question_type, payload=payload
                )

        assessment, created = Assessment.objects.get_or_create(
            name="Aptitude Basics",
            defaults={"description": "Arithmetic and reasoning warm-up", "duration": 30},
        )
        if created:
            for order, (skill, count) in enumerate(zip(skills, (3, 2)), start=1):
                AssessmentSkill.objects.create(
                    assessment=assessment, skill=skill, question_count=count, order=order
                )

        self.stdout.write(self.style.SUCCESS("Demo data seeded"))
