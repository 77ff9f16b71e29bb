"""Utilities for importing the student roster from CSV uploads."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import IO, Iterable

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction

from .models import Student

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "name",
    "email",
    "mobile",
    "year_of_pass",
    "date_of_registration",
    "stream",
    "college",
)
REQUIRED_COLUMNS = ("name", "email", "year_of_pass", "date_of_registration", "stream")


class StudentImportError(Exception):
    """Raised when the input file cannot be parsed at all."""


@dataclass(slots=True)
class ImportResult:
    processed_rows: int
    created_students: int
    skipped_rows: int
    errors: list[str] = field(default_factory=list)


@transaction.atomic
def import_students(*, input_file: IO, batch_size: int = 200) -> ImportResult:
    """Create students from a CSV roster, skipping invalid and duplicate rows.

    The first line is a header. Columns are matched by name when the header
    carries the known column names, otherwise by position in the order
    ``name,email,mobile,year_of_pass,date_of_registration,stream[,college]``.
    An email that already exists (in the database or earlier in the file) is
    reported and skipped rather than raising, so one bad row never blocks the
    rest of the upload. A file that cannot be decoded imports nothing.
    """

    processed_rows = 0
    created_count = 0
    errors: list[str] = []
    batch: list[Student] = []
    seen_emails = set(Student.objects.values_list("email", flat=True))

    for processed_rows, row in enumerate(_parse_csv(input_file), start=1):
        try:
            student = _build_student(row)
        except ValueError as exc:
            errors.append(f"Row {processed_rows}: {exc}")
            continue

        if student.email in seen_emails:
            errors.append(f"Row {processed_rows}: email '{student.email}' already registered")
            continue
        seen_emails.add(student.email)
        batch.append(student)

        if len(batch) >= batch_size:
            Student.objects.bulk_create(batch)
            created_count += len(batch)
            batch.clear()

    if batch:
        Student.objects.bulk_create(batch)
        created_count += len(batch)

    result = ImportResult(
        processed_rows=processed_rows,
        created_students=created_count,
        skipped_rows=processed_rows - created_count,
        errors=errors,
    )
    logger.info(
        "Student import finished",
        extra={
            "processed_rows": result.processed_rows,
            "created_students": result.created_students,
            "skipped_rows": result.skipped_rows,
        },
    )
    return result


def _parse_csv(file_obj: IO) -> Iterable[dict]:
    stream, should_detach = _as_text_stream(file_obj, newline="")
    try:
        reader = csv.reader(stream)
        try:
            header = next(reader, None)
            if header is None:
                return

            columns = _resolve_columns(header)
            for raw in reader:
                if not any(cell.strip() for cell in raw):
                    continue
                yield {
                    column: (raw[index].strip() if index < len(raw) else "")
                    for index, column in enumerate(columns)
                }
        except UnicodeDecodeError as exc:
            raise StudentImportError(f"Could not decode CSV: {exc}") from exc
    finally:
        if should_detach:
            stream.detach()


def _resolve_columns(header: list[str]) -> tuple[str, ...]:
    normalized = tuple(cell.strip().lower() for cell in header)
    if set(REQUIRED_COLUMNS).issubset(normalized):
        return normalized
    return CSV_COLUMNS


def _build_student(row: dict) -> Student:
    missing = [column for column in REQUIRED_COLUMNS if not row.get(column)]
    if missing:
        raise ValueError(f"missing required field(s): {', '.join(missing)}")

    email = row["email"].strip().lower()
    try:
        validate_email(email)
    except ValidationError as exc:
        raise ValueError(f"invalid email '{email}'") from exc

    return Student(
        name=row["name"],
        email=email,
        mobile=row.get("mobile") or "",
        year_of_pass=_parse_year(row["year_of_pass"]),
        date_of_registration=_parse_date(row["date_of_registration"]),
        stream=_parse_stream(row["stream"]),
        college=row.get("college") or "",
    )


def _parse_year(value: str) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"year_of_pass '{value}' is not a number") from exc
    if year <= 0:
        raise ValueError(f"year_of_pass '{value}' must be positive")
    return year


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"date_of_registration '{value}' must be YYYY-MM-DD") from exc


def _parse_stream(value: str) -> str:
    normalized = value.replace(" ", "").lower()
    for choice in Student.Stream.values:
        if choice.lower() == normalized:
            return choice
    raise ValueError(f"unknown stream '{value}'")


def _as_text_stream(file_obj: IO, newline: str | None = None):
    if hasattr(file_obj, "seek"):
        try:
            file_obj.seek(0)
        except (OSError, io.UnsupportedOperation):  # pragma: no cover
            pass

    if isinstance(file_obj, io.TextIOBase):
        return file_obj, False

    wrapper = io.TextIOWrapper(file_obj, encoding="utf-8-sig", newline=newline)
    return wrapper, True


__all__ = [
    "ImportResult",
    "StudentImportError",
    "import_students",
]
