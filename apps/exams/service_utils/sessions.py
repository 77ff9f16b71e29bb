"""Business logic for a student's exam session.

A session (``AssignmentStudent``) moves through three states:

* not started - created with the assignment, no ``start_time``;
* in progress - the first exam load stamps ``start_time`` and persists the
  sampled questions;
* finalized - ``attended`` is set, which is terminal.

The countdown itself runs in the client. The only promise made here is that
``finalize_exam`` can be called at any time, any number of times, and counts
the attendee exactly once. Every write path locks the session row, so two
students never wait on each other while one student's overlapping requests
are applied one at a time. That includes answers to different questions of
the same session: they queue on the session lock rather than running in
parallel, which keeps the attended check and the upsert in one critical
section.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from random import Random
from typing import List

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from students.models import Student

from ..exceptions import Conflict, InvalidCredentials, NotFound, ValidationError
from ..models import (
    Assessment,
    Assignment,
    AssignmentAnswer,
    AssignmentStudent,
    Question,
    SessionQuestion,
    StudentLog,
)
from .sampling import sample_questions

logger = logging.getLogger(__name__)


@dataclass
class ExamData:
    assignment_student: AssignmentStudent
    assignment: Assignment
    assessment: Assessment
    student: Student
    questions: List[Question]
    answers: List[AssignmentAnswer]


def _log_event(session: AssignmentStudent, event: str, **details) -> StudentLog:
    return StudentLog.objects.create(
        student_id=session.student_id,
        assignment_id=session.assignment_id,
        assignment_student_id=session.pk,
        event=event,
        details=details,
    )


def _lock_session(assignment_student_id: int) -> AssignmentStudent:
    try:
        return (
            AssignmentStudent.objects.select_for_update(of=("self",))
            .select_related("assignment__assessment", "student")
            .get(pk=assignment_student_id)
        )
    except AssignmentStudent.DoesNotExist as exc:
        raise NotFound("Exam session not found.") from exc


def get_session_or_404(assignment_student_id: int) -> AssignmentStudent:
    try:
        return AssignmentStudent.objects.select_related(
            "assignment__assessment", "student"
        ).get(pk=assignment_student_id)
    except AssignmentStudent.DoesNotExist as exc:
        raise NotFound("Exam session not found.") from exc


def student_login(assignment_id: int, email: str, code: str) -> AssignmentStudent:
    """Authenticate a student for ``assignment_id`` by email and access code."""

    email = (email or "").strip()
    code = (code or "").strip().upper()

    session = None
    student = Student.objects.filter(email__iexact=email).first() if email else None
    if student is not None and code:
        session = (
            AssignmentStudent.objects.select_related("assignment", "student")
            .filter(assignment_id=assignment_id, student=student, code=code)
            .first()
        )

    if session is None or session.attended:
        logger.warning("Exam login rejected", extra={"assignment_id": assignment_id})
        raise InvalidCredentials()

    _log_event(session, StudentLog.Event.LOGIN, assignment_id=assignment_id)
    logger.info(
        "Exam login accepted",
        extra={"assignment_id": assignment_id, "assignment_student_id": session.pk},
    )
    return session


def _persisted_questions(session: AssignmentStudent) -> List[Question]:
    rows = (
        SessionQuestion.objects.filter(assignment_student=session)
        .select_related("question__skill")
        .order_by("order")
    )
    return [row.question for row in rows]


@transaction.atomic
def get_exam_data(assignment_student_id: int, *, rng: Random | None = None) -> ExamData:
    """Load the exam for a session, starting it on the first call.

    The first load stamps ``start_time`` and stores the sampled questions;
    later loads return the stored set in the same order. Finalized sessions
    are returned read-only and are never started.
    """

    session = _lock_session(assignment_student_id)
    assignment = session.assignment
    assessment = assignment.assessment

    if session.start_time is None and not session.attended:
        session.start_time = timezone.now()
        session.save(update_fields=["start_time", "updated_at"])
        drawn = sample_questions(assessment, rng=rng)
        SessionQuestion.objects.bulk_create(
            [
                SessionQuestion(assignment_student=session, question=question, order=index)
                for index, question in enumerate(drawn, start=1)
            ]
        )
        _log_event(
            session,
            StudentLog.Event.EXAM_STARTED,
            question_ids=[question.pk for question in drawn],
        )
        logger.info(
            "Exam session started",
            extra={
                "assignment_student_id": session.pk,
                "questions_count": len(drawn),
            },
        )

    questions = _persisted_questions(session)
    answers = list(
        AssignmentAnswer.objects.filter(assignment_student=session).order_by("question_id")
    )
    return ExamData(
        assignment_student=session,
        assignment=assignment,
        assessment=assessment,
        student=session.student,
        questions=questions,
        answers=answers,
    )


@transaction.atomic
def save_answer(assignment_student_id: int, question_id: int, text: str) -> AssignmentAnswer:
    """Insert or overwrite the session's answer to ``question_id``."""

    session = _lock_session(assignment_student_id)

    if session.attended:
        raise Conflict("The exam has already been submitted.")
    if session.start_time is None:
        raise Conflict("The exam has not been started.")

    if not Question.objects.filter(pk=question_id).exists():
        raise NotFound("Question not found.")
    if not SessionQuestion.objects.filter(
        assignment_student=session, question_id=question_id
    ).exists():
        raise ValidationError({"question_id": ["Question is not part of this exam."]})

    answer, _ = AssignmentAnswer.objects.update_or_create(
        assignment_student=session,
        question_id=question_id,
        defaults={"answer": text or "", "answer_time": timezone.now()},
    )
    return answer


@transaction.atomic
def finalize_exam(assignment_student_id: int) -> AssignmentStudent:
    """Mark the session submitted and count the attendee once.

    Repeated or concurrent calls are safe: the row lock serialises them and
    only the call that observes ``attended=False`` bumps the counter.
    """

    session = _lock_session(assignment_student_id)

    if session.attended:
        logger.info(
            "Exam already finalized",
            extra={"assignment_student_id": session.pk},
        )
        return session

    session.attended = True
    session.end_time = timezone.now()
    session.save(update_fields=["attended", "end_time", "updated_at"])
    Assignment.objects.filter(pk=session.assignment_id).update(
        attendees=F("attendees") + 1
    )
    session.assignment.refresh_from_db(fields=["attendees"])

    _log_event(session, StudentLog.Event.EXAM_FINALIZED)
    logger.info(
        "Exam session finalized",
        extra={
            "assignment_student_id": session.pk,
            "assignment_id": session.assignment_id,
        },
    )
    return session


def time_left(session: AssignmentStudent) -> timedelta | None:
    """Remaining exam time, or ``None`` before the session has started."""

    if session.start_time is None:
        return None
    if session.attended:
        return timedelta(0)
    duration = timedelta(minutes=session.assignment.assessment.duration)
    remaining = session.start_time + duration - timezone.now()
    if remaining < timedelta(0):
        remaining = timedelta(0)
    return remaining


__all__ = [
    "ExamData",
    "finalize_exam",
    "get_exam_data",
    "get_session_or_404",
    "save_answer",
    "student_login",
    "time_left",
]
