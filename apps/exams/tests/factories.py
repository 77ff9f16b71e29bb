from __future__ import annotations

from datetime import date
from uuid import uuid4

from apps.exams.models import Assessment, AssessmentSkill, Assignment, Question, Skill
from apps.exams.service_utils import assignments as assignment_service
from apps.exams.service_utils.cohort import CohortFilter
from students.models import Student


def create_student(
    *,
    name: str | None = None,
    email: str | None = None,
    year_of_pass: int = 2023,
    stream: str = Student.Stream.COMPUTER_SCIENCE,
    college: str = "",
    date_of_registration: date | None = None,
) -> Student:
    suffix = uuid4().hex[:8]
    return Student.objects.create(
        name=name or f"Student {suffix}",
        email=email or f"student-{suffix}@example.com",
        mobile="1234567890",
        year_of_pass=year_of_pass,
        date_of_registration=date_of_registration or date(2023, 1, 15),
        stream=stream,
        college=college,
    )


def create_skill(name: str | None = None) -> Skill:
    return Skill.objects.create(name=name or f"Skill {uuid4()}", description="")


def create_question(
    *,
    skill: Skill | None = None,
    text: str | None = None,
    question_type: str = Question.Type.ANSWER,
    payload: dict | None = None,
) -> Question:
    skill = skill or create_skill()
    if payload is None:
        if question_type == Question.Type.CHOICE:
            payload = {"options": ["1", "2", "3", "4"], "correct_option": 1}
        elif question_type == Question.Type.CODE:
            payload = {"expected_code": "print(1)", "test_cases": []}
        else:
            payload = {"expected_answer": "42"}
    return Question.objects.create(
        skill=skill,
        question=text or f"Question {uuid4()}",
        type=question_type,
        payload=payload,
    )


def create_questions(skill: Skill, count: int) -> list[Question]:
    return [create_question(skill=skill) for _ in range(count)]


def create_assessment(*, name: str | None = None, duration: int = 30) -> Assessment:
    return Assessment.objects.create(
        name=name or f"Assessment {uuid4()}",
        description="",
        duration=duration,
    )


def add_requirement(
    *,
    assessment: Assessment,
    skill: Skill,
    question_count: int,
    order: int,
) -> AssessmentSkill:
    return AssessmentSkill.objects.create(
        assessment=assessment,
        skill=skill,
        question_count=question_count,
        order=order,
    )


def create_assignment(
    *,
    assessment: Assessment | None = None,
    name: str = "Assignment",
    cohort: CohortFilter | None = None,
) -> Assignment:
    assessment = assessment or create_assessment()
    return assignment_service.create_assignment(name, assessment.pk, cohort)
