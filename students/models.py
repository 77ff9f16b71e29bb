"""Student roster imported in bulk and used to build assignment cohorts."""

from django.db import models


class Student(models.Model):
    """A student who can be issued assessments."""

    class Stream(models.TextChoices):
        COMPUTER_SCIENCE = "ComputerScience", "Computer Science"
        MECHANICAL = "Mechanical", "Mechanical"
        ELECTRICAL = "Electrical", "Electrical"

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    mobile = models.CharField(max_length=32, blank=True)
    year_of_pass = models.PositiveIntegerField()
    date_of_registration = models.DateField()
    stream = models.CharField(max_length=32, choices=Stream.choices)
    college = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["year_of_pass", "stream"], name="students_st_year_of_4b1f0e_idx"),
            models.Index(fields=["college"], name="students_st_college_8c2d51_idx"),
        ]

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        return super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.name} <{self.email}>"
