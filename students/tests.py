"""Tests for the students app."""

import io
from datetime import date
from pathlib import Path
from tempfile import NamedTemporaryFile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.urls import reverse

from .importing import StudentImportError, import_students
from .models import Student

ROSTER = (
    "name,email,mobile,year_of_pass,date_of_registration,stream,college\n"
    "Alice Johnson,Alice@Example.com,1234567890,2023,2023-01-15,ComputerScience,North\n"
    "Bob Smith,bob@example.com,2345678901,2023,2023-02-20,Mechanical,\n"
)


def _large_roster_with_bad_row() -> bytes:
    lines = ["name,email,mobile,year_of_pass,date_of_registration,stream,college"]
    lines += [
        f"Student {index},student{index}@example.com,,2023,2023-01-15,ComputerScience,"
        for index in range(400)
    ]
    body = ("\n".join(lines) + "\n").encode("utf-8")
    return body + b"Broken \xff\xfe,broken@example.com,,2023,2023-01-15,Mechanical,\n"


class ImportStudentsTests(TestCase):
    def test_import_creates_students(self):
        result = import_students(input_file=io.BytesIO(ROSTER.encode("utf-8")))

        self.assertEqual(result.processed_rows, 2)
        self.assertEqual(result.created_students, 2)
        self.assertEqual(result.skipped_rows, 0)
        alice = Student.objects.get(email="alice@example.com")
        self.assertEqual(alice.year_of_pass, 2023)
        self.assertEqual(alice.date_of_registration, date(2023, 1, 15))
        self.assertEqual(alice.stream, Student.Stream.COMPUTER_SCIENCE)
        self.assertEqual(alice.college, "North")

    def test_columns_matched_by_name(self):
        content = (
            "email,name,stream,year_of_pass,date_of_registration\n"
            "carol@example.com,Carol,computer science,2024,2023-03-10\n"
        )
        result = import_students(input_file=io.StringIO(content))

        self.assertEqual(result.created_students, 1)
        carol = Student.objects.get(email="carol@example.com")
        self.assertEqual(carol.name, "Carol")
        self.assertEqual(carol.stream, Student.Stream.COMPUTER_SCIENCE)

    def test_positional_columns_without_known_header(self):
        content = "a,b,c,d,e,f\nDiana,diana@example.com,,2024,2023-04-05,Electrical\n"
        result = import_students(input_file=io.StringIO(content))

        self.assertEqual(result.created_students, 1)
        self.assertEqual(Student.objects.get().stream, Student.Stream.ELECTRICAL)

    def test_duplicates_and_invalid_rows_are_skipped(self):
        Student.objects.create(
            name="Bob",
            email="bob@example.com",
            year_of_pass=2023,
            date_of_registration=date(2023, 2, 20),
            stream=Student.Stream.MECHANICAL,
        )
        content = ROSTER + (
            "Alice Again,alice@example.com,,2023,2023-01-15,ComputerScience,\n"
            "Broken,broken@example.com,,soon,2023-01-15,ComputerScience,\n"
            "Odd,odd@example.com,,2023,15/01/2023,ComputerScience,\n"
            "Bio,bio@example.com,,2023,2023-01-15,Biology,\n"
        )
        result = import_students(input_file=io.StringIO(content), batch_size=1)

        self.assertEqual(result.processed_rows, 6)
        self.assertEqual(result.created_students, 1)
        self.assertEqual(result.skipped_rows, 5)
        self.assertEqual(len(result.errors), 5)
        self.assertEqual(Student.objects.count(), 2)

    def test_undecodable_row_imports_nothing(self):
        content = _large_roster_with_bad_row()

        with self.assertRaises(StudentImportError):
            import_students(input_file=io.BytesIO(content), batch_size=2)
        self.assertFalse(Student.objects.exists())

    def test_empty_file(self):
        result = import_students(input_file=io.StringIO(""))
        self.assertEqual(result.processed_rows, 0)
        self.assertEqual(result.created_students, 0)


class ImportStudentsCommandTests(TestCase):
    def test_import_from_csv(self):
        with NamedTemporaryFile("w", encoding="utf-8", suffix=".csv", delete=False) as tmp:
            tmp.write(ROSTER)
        path = Path(tmp.name)
        self.addCleanup(lambda: path.unlink(missing_ok=True))
        stdout = io.StringIO()

        call_command("import_students", path=str(path), stdout=stdout)

        self.assertEqual(Student.objects.count(), 2)
        self.assertIn("created 2 student(s)", stdout.getvalue())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command("import_students", path="/nonexistent/roster.csv")


class StudentApiTests(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.admin = user_model.objects.create_user(
            username="admin", password="pass", is_staff=True
        )

    def test_upload_roster(self):
        self.client.force_login(self.admin)
        upload = SimpleUploadedFile("roster.csv", ROSTER.encode("utf-8"), content_type="text/csv")

        response = self.client.post(reverse("students:student-import"), {"file": upload})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["created"], 2)
        listing = self.client.get(reverse("students:student-list")).json()
        self.assertEqual(
            [row["email"] for row in listing], ["alice@example.com", "bob@example.com"]
        )

    def test_undecodable_upload_is_rejected(self):
        self.client.force_login(self.admin)
        upload = SimpleUploadedFile(
            "roster.csv", _large_roster_with_bad_row(), content_type="text/csv"
        )

        response = self.client.post(reverse("students:student-import"), {"file": upload})

        self.assertEqual(response.status_code, 400)
        self.assertIn("file", response.json())
        self.assertFalse(Student.objects.exists())

    def test_staff_only(self):
        response = self.client.get(reverse("students:student-list"))
        self.assertEqual(response.status_code, 403)
