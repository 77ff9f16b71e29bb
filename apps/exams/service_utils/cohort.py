"""Cohort selection: which students receive an assignment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from django.db.models import QuerySet

from students.models import Student


@dataclass(frozen=True, slots=True)
class CohortFilter:
    """Optional predicates combined with AND; unset predicates match everyone."""

    year_of_pass: int | None = None
    stream: str | None = None
    college: str | None = None
    date_of_registration: date | None = None

    def as_lookup(self) -> dict[str, Any]:
        lookup: dict[str, Any] = {}
        if self.year_of_pass is not None:
            lookup["year_of_pass"] = self.year_of_pass
        if self.stream:
            lookup["stream"] = self.stream
        if self.college:
            lookup["college"] = self.college
        if self.date_of_registration is not None:
            lookup["date_of_registration"] = self.date_of_registration
        return lookup

    def snapshot_fields(self) -> dict[str, Any]:
        """Assignment field values recording the filter used at creation."""

        return {
            "filter_year_of_pass": self.year_of_pass,
            "filter_stream": self.stream or "",
            "filter_college": self.college or "",
            "filter_date_of_registration": self.date_of_registration,
        }


def filter_students(
    queryset: QuerySet[Student] | None = None,
    *,
    cohort: CohortFilter | None = None,
) -> QuerySet[Student]:
    """Return students in ``queryset`` matching every predicate of ``cohort``."""

    queryset = Student.objects.all() if queryset is None else queryset
    cohort = cohort or CohortFilter()
    return queryset.filter(**cohort.as_lookup()).order_by("id")


__all__ = ["CohortFilter", "filter_students"]
