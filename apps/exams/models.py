from __future__ import annotations

from copy import deepcopy

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from students.models import Student

from . import question_payloads


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Skill(TimeStampedModel):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Question(TimeStampedModel):
    class Type(models.TextChoices):
        CHOICE = question_payloads.CHOICE, "Multiple choice"
        ANSWER = question_payloads.ANSWER, "Free answer"
        CODE = question_payloads.CODE, "Code"

    skill = models.ForeignKey(Skill, on_delete=models.CASCADE, related_name="questions")
    question = models.TextField()
    type = models.CharField(max_length=16, choices=Type.choices)
    payload = models.JSONField(
        default=dict,
        blank=True,
        help_text=(
            'choice: {"options": [4 strings], "correct_option": 1-4}; '
            'answer: {"expected_answer": "..."}; '
            'code: {"expected_code": "...", "test_cases": [{"input", "type", "output"}]}'
        ),
    )

    class Meta:
        ordering = ["skill", "id"]
        indexes = [models.Index(fields=["skill", "type"], name="exams_quest_skill_i_6a2c1e_idx")]

    def __str__(self) -> str:  # pragma: no cover - human readable
        return self.question[:60]

    def clean(self):
        super().clean()
        if not (self.question or "").strip():
            raise ValidationError({"question": "Question text is required."})
        try:
            parsed = question_payloads.parse_payload(self.type, self.payload)
        except question_payloads.PayloadError as exc:
            raise ValidationError({"payload": str(exc)}) from exc
        # Store the normalised form so readers never see loose keys
        self.payload = parsed.to_dict()

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def parsed_payload(self) -> question_payloads.QuestionPayload:
        return question_payloads.parse_payload(self.type, deepcopy(self.payload))


class Assessment(TimeStampedModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    duration = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Duration in minutes.",
    )
    skills = models.ManyToManyField(Skill, through="AssessmentSkill", related_name="assessments")

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def max_questions(self) -> int:
        return sum(requirement.question_count for requirement in self.requirements.all())


class AssessmentSkill(TimeStampedModel):
    class Pick(models.TextChoices):
        RANDOM = "random", "Random"

    assessment = models.ForeignKey(
        Assessment, on_delete=models.CASCADE, related_name="requirements"
    )
    skill = models.ForeignKey(Skill, on_delete=models.CASCADE, related_name="requirements")
    question_count = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    pick = models.CharField(max_length=16, choices=Pick.choices, default=Pick.RANDOM)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["assessment", "order", "id"]
        unique_together = (
            ("assessment", "order"),
            ("assessment", "skill"),
        )

    def __str__(self) -> str:
        return f"{self.assessment} -> {self.skill} x{self.question_count}"

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class Assignment(TimeStampedModel):
    name = models.CharField(max_length=255)
    date = models.DateField(default=timezone.localdate)
    assessment = models.ForeignKey(
        Assessment, on_delete=models.PROTECT, related_name="assignments"
    )
    filter_year_of_pass = models.PositiveIntegerField(null=True, blank=True)
    filter_stream = models.CharField(
        max_length=32, choices=Student.Stream.choices, blank=True
    )
    filter_college = models.CharField(max_length=255, blank=True)
    filter_date_of_registration = models.DateField(null=True, blank=True)
    total_students = models.PositiveIntegerField(default=0)
    attendees = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self) -> str:
        return self.name


class AssignmentStudent(TimeStampedModel):
    """One student's exam session inside an assignment."""

    class State(models.TextChoices):
        NOT_STARTED = "not_started", "Not started"
        IN_PROGRESS = "in_progress", "In progress"
        FINALIZED = "finalized", "Finalized"

    assignment = models.ForeignKey(
        Assignment, on_delete=models.CASCADE, related_name="assignment_students"
    )
    student = models.ForeignKey(
        Student, on_delete=models.CASCADE, related_name="assignment_sessions"
    )
    code = models.CharField(max_length=32)
    attended = models.BooleanField(default=False)
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    marks = models.PositiveIntegerField(null=True, blank=True)
    passed = models.BooleanField(null=True, blank=True)
    questions = models.ManyToManyField(
        "Question", through="SessionQuestion", related_name="sessions"
    )

    class Meta:
        ordering = ["assignment", "id"]
        unique_together = (
            ("assignment", "student"),
            ("assignment", "code"),
        )

    def __str__(self) -> str:
        return f"{self.student} - {self.assignment}"

    @property
    def state(self) -> str:
        if self.attended:
            return self.State.FINALIZED
        if self.start_time is not None:
            return self.State.IN_PROGRESS
        return self.State.NOT_STARTED


class SessionQuestion(models.Model):
    """Question drawn for a session, persisted so resumes see the same set."""

    assignment_student = models.ForeignKey(
        AssignmentStudent, on_delete=models.CASCADE, related_name="session_questions"
    )
    question = models.ForeignKey(
        Question, on_delete=models.CASCADE, related_name="session_questions"
    )
    order = models.PositiveIntegerField()

    class Meta:
        ordering = ["assignment_student", "order"]
        unique_together = (
            ("assignment_student", "order"),
            ("assignment_student", "question"),
        )

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"{self.assignment_student_id}#{self.order}: {self.question_id}"


class AssignmentAnswer(TimeStampedModel):
    assignment_student = models.ForeignKey(
        AssignmentStudent, on_delete=models.CASCADE, related_name="answers"
    )
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="answers")
    answer = models.TextField(blank=True)
    correct = models.BooleanField(null=True, blank=True)
    answer_time = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["assignment_student", "question"]
        constraints = [
            models.UniqueConstraint(
                fields=["assignment_student", "question"],
                name="assignment_answer_session_question_unique",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"{self.assignment_student_id} -> {self.question_id}"


class StudentLog(models.Model):
    """Append-only audit trail of exam session events."""

    class Event(models.TextChoices):
        LOGIN = "login", "Login"
        EXAM_STARTED = "exam_started", "Exam started"
        EXAM_FINALIZED = "exam_finalized", "Exam finalized"

    datetime = models.DateTimeField(default=timezone.now)
    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="logs")
    # Plain ids: log rows outlive the sessions and assignments they mention
    assignment_id = models.BigIntegerField(null=True, blank=True)
    assignment_student_id = models.BigIntegerField(null=True, blank=True)
    event = models.CharField(max_length=32, choices=Event.choices)
    details = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["datetime", "id"]
        indexes = [models.Index(fields=["student", "event"], name="exams_stude_student_1f9b7d_idx")]

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"{self.datetime:%Y-%m-%d %H:%M:%S} {self.student_id} {self.event}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValidationError("Student log entries are append-only.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Student log entries are append-only.")
