import threading
import unittest

from django.db import connection, connections
from django.test import TransactionTestCase

from apps.exams.models import AssignmentAnswer, AssignmentStudent
from apps.exams.service_utils import sessions as session_service

from . import factories


@unittest.skipUnless(
    connection.features.has_select_for_update,
    "Row locking is not supported by this database backend",
)
class ConcurrentSessionWritesTests(TransactionTestCase):
    def setUp(self):
        skill = factories.create_skill()
        factories.create_questions(skill, 2)
        assessment = factories.create_assessment()
        factories.add_requirement(assessment=assessment, skill=skill, question_count=2, order=1)
        factories.create_student()
        self.assignment = factories.create_assignment(assessment=assessment)
        self.session = AssignmentStudent.objects.get(assignment=self.assignment)
        self.exam = session_service.get_exam_data(self.session.pk)

    def _run_in_threads(self, *targets):
        barrier = threading.Barrier(len(targets))
        errors = []
        results = []

        def worker(target):
            try:
                barrier.wait()
                results.append(target())
            except Exception as exc:
                errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker, args=(target,)) for target in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(errors, [])
        return results

    def test_parallel_finalize_counts_attendee_once(self):
        self._run_in_threads(
            lambda: session_service.finalize_exam(self.session.pk),
            lambda: session_service.finalize_exam(self.session.pk),
        )

        self.assignment.refresh_from_db()
        self.assertEqual(self.assignment.attendees, 1)
        self.session.refresh_from_db()
        self.assertTrue(self.session.attended)

    def test_parallel_answers_keep_one_row(self):
        question = self.exam.questions[0]
        saved = self._run_in_threads(
            lambda: session_service.save_answer(self.session.pk, question.pk, "first"),
            lambda: session_service.save_answer(self.session.pk, question.pk, "second"),
        )

        answers = AssignmentAnswer.objects.filter(
            assignment_student=self.session, question=question
        )
        self.assertEqual(answers.count(), 1)
        stored = answers.get()
        last_write = max(saved, key=lambda answer: answer.answer_time)
        self.assertEqual(stored.answer, last_write.answer)
        self.assertEqual(stored.answer_time, last_write.answer_time)
