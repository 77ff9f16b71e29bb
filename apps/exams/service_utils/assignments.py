"""Issuing an assessment to a cohort and tearing the issue down again.

An assignment and its per-student session rows are written in one transaction,
so ``total_students`` always equals the number of session rows that exist.
"""
from __future__ import annotations

import logging
from typing import List

from django.db import transaction
from django.db.models import QuerySet

from ..exceptions import NotFound, ValidationError
from ..models import (
    Assessment,
    Assignment,
    AssignmentAnswer,
    AssignmentStudent,
    SessionQuestion,
)
from .codes import generate_unique_codes
from .cohort import CohortFilter, filter_students

logger = logging.getLogger(__name__)


def list_assignments() -> QuerySet[Assignment]:
    return Assignment.objects.select_related("assessment").order_by("-date", "-id")


def get_assignment_or_404(assignment_id: int) -> Assignment:
    try:
        return Assignment.objects.select_related("assessment").get(pk=assignment_id)
    except Assignment.DoesNotExist as exc:
        raise NotFound("Assignment not found.") from exc


@transaction.atomic
def create_assignment(
    name: str,
    assessment_id: int,
    cohort: CohortFilter | None = None,
) -> Assignment:
    """Create an assignment with one session per student matching ``cohort``."""

    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["Assignment name is required."]})

    try:
        assessment = Assessment.objects.get(pk=assessment_id)
    except Assessment.DoesNotExist as exc:
        raise NotFound("Assessment not found.") from exc

    cohort = cohort or CohortFilter()
    students = list(filter_students(cohort=cohort))

    assignment = Assignment.objects.create(
        name=name,
        assessment=assessment,
        total_students=len(students),
        attendees=0,
        **cohort.snapshot_fields(),
    )

    codes = generate_unique_codes(len(students))
    AssignmentStudent.objects.bulk_create(
        [
            AssignmentStudent(
                assignment=assignment,
                student=student,
                code=code,
                attended=False,
            )
            for student, code in zip(students, codes)
        ]
    )

    logger.info(
        "Assignment created",
        extra={
            "assignment_id": assignment.pk,
            "assessment_id": assessment.pk,
            "total_students": assignment.total_students,
        },
    )
    return assignment


@transaction.atomic
def delete_assignment(assignment_id: int) -> None:
    """Delete an assignment together with its sessions and their answers."""

    try:
        assignment = Assignment.objects.select_for_update().get(pk=assignment_id)
    except Assignment.DoesNotExist as exc:
        raise NotFound("Assignment not found.") from exc

    sessions = AssignmentStudent.objects.filter(assignment=assignment)
    answers_deleted, _ = AssignmentAnswer.objects.filter(
        assignment_student__in=sessions
    ).delete()
    SessionQuestion.objects.filter(assignment_student__in=sessions).delete()
    sessions_deleted, _ = sessions.delete()
    assignment.delete()

    logger.info(
        "Assignment deleted",
        extra={
            "assignment_id": assignment_id,
            "sessions_deleted": sessions_deleted,
            "answers_deleted": answers_deleted,
        },
    )


def list_assignment_students(assignment_id: int) -> List[dict]:
    """Return the roster of an assignment with each student's code and status."""

    assignment = get_assignment_or_404(assignment_id)
    sessions = (
        AssignmentStudent.objects.filter(assignment=assignment)
        .select_related("student")
        .order_by("id")
    )
    return [
        {
            "id": session.id,
            "student_id": session.student_id,
            "student_name": session.student.name,
            "student_email": session.student.email,
            "code": session.code,
            "attended": session.attended,
            "start_time": session.start_time,
            "end_time": session.end_time,
        }
        for session in sessions
    ]


__all__ = [
    "create_assignment",
    "delete_assignment",
    "get_assignment_or_404",
    "list_assignment_students",
    "list_assignments",
]
