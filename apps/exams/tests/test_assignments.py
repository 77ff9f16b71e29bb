from unittest import mock

from django.test import TestCase

from apps.exams.exceptions import Conflict, NotFound, ValidationError
from apps.exams.models import (
    Assignment,
    AssignmentAnswer,
    AssignmentStudent,
    SessionQuestion,
)
from apps.exams.service_utils import assignments as assignment_service
from apps.exams.service_utils import sessions as session_service
from apps.exams.service_utils.cohort import CohortFilter
from students.models import Student

from . import factories


class CreateAssignmentTests(TestCase):
    def setUp(self):
        self.assessment = factories.create_assessment()
        self.alice = factories.create_student(year_of_pass=2023)
        self.bob = factories.create_student(
            year_of_pass=2023, stream=Student.Stream.MECHANICAL
        )
        factories.create_student(year_of_pass=2024)
        factories.create_student(year_of_pass=2024, stream=Student.Stream.ELECTRICAL)

    def test_creates_one_session_per_matching_student(self):
        assignment = assignment_service.create_assignment(
            "Spring test", self.assessment.pk, CohortFilter(year_of_pass=2023)
        )

        self.assertEqual(assignment.total_students, 2)
        self.assertEqual(assignment.attendees, 0)
        self.assertEqual(assignment.filter_year_of_pass, 2023)
        sessions = AssignmentStudent.objects.filter(assignment=assignment).order_by("id")
        self.assertEqual(
            [session.student_id for session in sessions], [self.alice.id, self.bob.id]
        )
        codes = [session.code for session in sessions]
        self.assertEqual(len(set(codes)), 2)
        for session in sessions:
            self.assertFalse(session.attended)
            self.assertIsNone(session.start_time)
            self.assertEqual(session.state, AssignmentStudent.State.NOT_STARTED)

    def test_empty_cohort_creates_empty_assignment(self):
        assignment = assignment_service.create_assignment(
            "Nobody", self.assessment.pk, CohortFilter(year_of_pass=1990)
        )
        self.assertEqual(assignment.total_students, 0)
        self.assertFalse(assignment.assignment_students.exists())

    def test_unknown_assessment(self):
        with self.assertRaises(NotFound):
            assignment_service.create_assignment("Broken", 999999)
        self.assertFalse(Assignment.objects.exists())

    def test_blank_name_rejected(self):
        with self.assertRaises(ValidationError):
            assignment_service.create_assignment("   ", self.assessment.pk)

    def test_code_failure_rolls_back_assignment(self):
        with mock.patch(
            "apps.exams.service_utils.assignments.generate_unique_codes",
            side_effect=Conflict("no codes"),
        ):
            with self.assertRaises(Conflict):
                assignment_service.create_assignment("Doomed", self.assessment.pk)

        self.assertFalse(Assignment.objects.exists())
        self.assertFalse(AssignmentStudent.objects.exists())

    def test_roster_lists_codes(self):
        assignment = factories.create_assignment(
            assessment=self.assessment, cohort=CohortFilter(year_of_pass=2023)
        )
        rows = assignment_service.list_assignment_students(assignment.pk)
        self.assertEqual([row["student_email"] for row in rows], [self.alice.email, self.bob.email])
        self.assertTrue(all(row["code"] for row in rows))
        self.assertFalse(any(row["attended"] for row in rows))


class DeleteAssignmentTests(TestCase):
    def setUp(self):
        skill = factories.create_skill()
        factories.create_questions(skill, 2)
        self.assessment = factories.create_assessment()
        factories.add_requirement(
            assessment=self.assessment, skill=skill, question_count=2, order=1
        )
        self.student = factories.create_student()
        self.assignment = factories.create_assignment(assessment=self.assessment)

    def test_delete_removes_sessions_and_answers(self):
        session = self.assignment.assignment_students.get()
        exam = session_service.get_exam_data(session.pk)
        session_service.save_answer(session.pk, exam.questions[0].pk, "42")

        assignment_service.delete_assignment(self.assignment.pk)

        self.assertFalse(Assignment.objects.filter(pk=self.assignment.pk).exists())
        self.assertFalse(AssignmentStudent.objects.exists())
        self.assertFalse(SessionQuestion.objects.exists())
        self.assertFalse(AssignmentAnswer.objects.exists())
        self.assertTrue(Student.objects.filter(pk=self.student.pk).exists())

    def test_delete_unknown(self):
        with self.assertRaises(NotFound):
            assignment_service.delete_assignment(999999)
