import json

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from apps.exams.exceptions import INVALID_CREDENTIALS_MESSAGE
from apps.exams.models import Assignment, AssignmentStudent, Question

from . import factories


class AdminAssignmentApiTests(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.admin = user_model.objects.create_user(
            username="admin", password="pass", is_staff=True
        )
        self.client.force_login(self.admin)
        self.assessment = factories.create_assessment(name="Aptitude")
        self.alice = factories.create_student(year_of_pass=2023)
        factories.create_student(year_of_pass=2024)

    def test_create_list_and_delete(self):
        response = self.client.post(
            reverse("exams:assignment-list"),
            data=json.dumps(
                {"name": "Batch 2023", "assessment_id": self.assessment.pk, "year_of_pass": 2023}
            ),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["total_students"], 1)
        self.assertEqual(payload["attendees"], 0)
        self.assertEqual(payload["assessment_name"], "Aptitude")
        assignment_id = payload["id"]

        list_resp = self.client.get(reverse("exams:assignment-list"))
        self.assertEqual([row["id"] for row in list_resp.json()], [assignment_id])

        roster = self.client.get(
            reverse("exams:assignment-students", args=[assignment_id])
        ).json()
        self.assertEqual(len(roster), 1)
        self.assertEqual(roster[0]["student_id"], self.alice.pk)
        self.assertTrue(roster[0]["code"])

        delete_resp = self.client.delete(
            reverse("exams:assignment-detail", args=[assignment_id])
        )
        self.assertEqual(delete_resp.status_code, 204)
        self.assertFalse(Assignment.objects.exists())

        missing = self.client.get(reverse("exams:assignment-detail", args=[assignment_id]))
        self.assertEqual(missing.status_code, 404)

    def test_unknown_assessment_is_404(self):
        response = self.client.post(
            reverse("exams:assignment-list"),
            data=json.dumps({"name": "Broken", "assessment_id": 999999}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 404)

    def test_invalid_stream_is_400(self):
        response = self.client.post(
            reverse("exams:assignment-list"),
            data=json.dumps(
                {"name": "Bad", "assessment_id": self.assessment.pk, "stream": "Biology"}
            ),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("stream", response.json())

    def test_catalog_lists(self):
        skill = factories.create_skill("Arithmetic")
        factories.create_questions(skill, 2)
        factories.add_requirement(
            assessment=self.assessment, skill=skill, question_count=2, order=1
        )

        skills = self.client.get(reverse("exams:skill-list")).json()
        self.assertEqual(skills[0]["name"], "Arithmetic")
        self.assertEqual(skills[0]["questions_count"], 2)

        assessments = self.client.get(reverse("exams:assessment-list")).json()
        self.assertEqual(assessments[0]["max_questions"], 2)
        self.assertEqual(assessments[0]["requirements"][0]["skill_name"], "Arithmetic")

    def test_requires_staff(self):
        self.client.logout()
        response = self.client.get(reverse("exams:assignment-list"))
        self.assertEqual(response.status_code, 403)


class StudentExamApiFlowTests(TestCase):
    def setUp(self):
        skill = factories.create_skill()
        factories.create_question(
            skill=skill,
            text="Pick **one**",
            question_type=Question.Type.CHOICE,
            payload={"options": ["a", "b", "c", "d"], "correct_option": 3},
        )
        factories.create_question(skill=skill, text="What is 6 * 7?")
        self.assessment = factories.create_assessment(duration=20)
        factories.add_requirement(
            assessment=self.assessment, skill=skill, question_count=2, order=1
        )
        self.student = factories.create_student(email="bob@example.com")
        self.assignment = factories.create_assignment(assessment=self.assessment)
        self.session = AssignmentStudent.objects.get(assignment=self.assignment)

    def _login(self, code=None):
        return self.client.post(
            reverse("exams:exam-login"),
            data=json.dumps(
                {
                    "assignment_id": self.assignment.pk,
                    "email": "bob@example.com",
                    "code": code or self.session.code,
                }
            ),
            content_type="application/json",
        )

    def test_full_exam_flow(self):
        login_resp = self._login()
        self.assertEqual(login_resp.status_code, 200)
        self.assertEqual(login_resp.json()["id"], self.session.pk)
        self.assertEqual(login_resp.json()["state"], "not_started")

        data_url = reverse("exams:exam-data", args=[self.session.pk])
        exam = self.client.get(data_url).json()
        self.assertEqual(exam["assignment_student"]["state"], "in_progress")
        self.assertEqual(exam["student"]["email"], "bob@example.com")
        self.assertEqual(len(exam["questions"]), 2)
        self.assertGreater(exam["time_left"], 0)
        self.assertLessEqual(exam["time_left"], 20 * 60)
        for question in exam["questions"]:
            self.assertNotIn("correct_option", question["payload"])
            self.assertNotIn("expected_answer", question["payload"])
        choice = next(q for q in exam["questions"] if q["type"] == "choice")
        self.assertEqual(choice["payload"], {"options": ["a", "b", "c", "d"]})
        self.assertIn("<strong>one</strong>", choice["question_html"])

        question_id = exam["questions"][0]["id"]
        answer_url = reverse("exams:exam-answer", args=[self.session.pk, question_id])
        for text in ("first", "second"):
            answer_resp = self.client.put(
                answer_url,
                data=json.dumps({"answer": text}),
                content_type="application/json",
            )
            self.assertEqual(answer_resp.status_code, 200)

        reloaded = self.client.get(data_url).json()
        self.assertEqual(
            [q["id"] for q in reloaded["questions"]], [q["id"] for q in exam["questions"]]
        )
        self.assertEqual(len(reloaded["answers"]), 1)
        self.assertEqual(reloaded["answers"][0]["answer"], "second")

        finalize_url = reverse("exams:exam-finalize", args=[self.session.pk])
        self.assertEqual(self.client.post(finalize_url).status_code, 200)
        repeat = self.client.post(finalize_url)
        self.assertEqual(repeat.status_code, 200)
        self.assertEqual(repeat.json()["state"], "finalized")
        self.assignment.refresh_from_db()
        self.assertEqual(self.assignment.attendees, 1)

        late = self.client.put(
            answer_url, data=json.dumps({"answer": "late"}), content_type="application/json"
        )
        self.assertEqual(late.status_code, 409)

        relogin = self._login()
        self.assertEqual(relogin.status_code, 400)
        self.assertEqual(relogin.json()["detail"], INVALID_CREDENTIALS_MESSAGE)

    def test_wrong_code(self):
        response = self._login(code="ZZZZZZZZ")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], INVALID_CREDENTIALS_MESSAGE)

    def test_exam_requires_login(self):
        response = self.client.get(reverse("exams:exam-data", args=[self.session.pk]))
        self.assertEqual(response.status_code, 403)
        self.session.refresh_from_db()
        self.assertIsNone(self.session.start_time)

    def test_cannot_open_another_students_session(self):
        factories.create_student()
        other_assignment = factories.create_assignment(assessment=self.assessment, name="Other")
        other_session = other_assignment.assignment_students.exclude(student=self.student).get()
        self._login()

        response = self.client.get(reverse("exams:exam-data", args=[other_session.pk]))
        self.assertEqual(response.status_code, 403)
