from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import APIException

from apps.exams.service_utils import assignments as assignment_service
from apps.exams.service_utils.cohort import CohortFilter
from students.models import Student


class Command(BaseCommand):
    help = "Issue an assessment to the students matching the given filters"

    def add_arguments(self, parser):
        parser.add_argument("--name", required=True)
        parser.add_argument("--assessment-id", type=int, required=True)
        parser.add_argument("--year-of-pass", type=int)
        parser.add_argument("--stream", choices=Student.Stream.values)
        parser.add_argument("--college")
        parser.add_argument("--date-of-registration", type=date.fromisoformat)
        parser.add_argument(
            "--show-codes",
            action="store_true",
            help="Print the generated access code of every student",
        )

    def handle(self, *args, **options):
        cohort = CohortFilter(
            year_of_pass=options.get("year_of_pass"),
            stream=options.get("stream"),
            college=options.get("college"),
            date_of_registration=options.get("date_of_registration"),
        )
        try:
            assignment = assignment_service.create_assignment(
                options["name"], options["assessment_id"], cohort
            )
        except APIException as exc:
            raise CommandError(str(exc.detail)) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Created assignment {assignment.pk} '{assignment.name}' "
                f"for {assignment.total_students} student(s)."
            )
        )
        if options["show_codes"]:
            for row in assignment_service.list_assignment_students(assignment.pk):
                self.stdout.write(f"{row['student_email']}\t{row['code']}")
