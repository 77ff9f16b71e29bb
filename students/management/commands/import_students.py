from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from students.importing import StudentImportError, import_students


class Command(BaseCommand):
    help = "Import students from a CSV roster (duplicates by email are skipped)"

    def add_arguments(self, parser):
        parser.add_argument("--path", required=True)
        parser.add_argument("--batch-size", type=int, default=200)

    def handle(self, *args, **options):
        path = Path(options["path"]).expanduser()
        if not path.exists():
            raise CommandError(f"File '{path}' does not exist")

        with path.open("rb") as csv_file:
            try:
                result = import_students(
                    input_file=csv_file, batch_size=options["batch_size"]
                )
            except StudentImportError as exc:
                raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Processed {result.processed_rows} row(s); "
                f"created {result.created_students} student(s), "
                f"skipped {result.skipped_rows}."
            )
        )

        if result.errors:
            self.stdout.write(
                self.style.WARNING(f"Encountered {len(result.errors)} problem row(s):")
            )
            for error in result.errors:
                self.stdout.write(f"- {error}")
