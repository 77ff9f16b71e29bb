import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Skill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question", models.TextField()),
                (
                    "type",
                    models.CharField(
                        choices=[("choice", "Multiple choice"), ("answer", "Free answer"), ("code", "Code")],
                        max_length=16,
                    ),
                ),
                (
                    "payload",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text=(
                            'choice: {"options": [4 strings], "correct_option": 1-4}; '
                            'answer: {"expected_answer": "..."}; '
                            'code: {"expected_code": "...", "test_cases": [{"input", "type", "output"}]}'
                        ),
                    ),
                ),
                (
                    "skill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="exams.skill",
                    ),
                ),
            ],
            options={
                "ordering": ["skill", "id"],
                "indexes": [models.Index(fields=["skill", "type"], name="exams_quest_skill_i_6a2c1e_idx")],
            },
        ),
        migrations.CreateModel(
            name="Assessment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "duration",
                    models.PositiveIntegerField(
                        help_text="Duration in minutes.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="AssessmentSkill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question_count", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("pick", models.CharField(choices=[("random", "Random")], default="random", max_length=16)),
                ("order", models.PositiveIntegerField(default=0)),
                (
                    "assessment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requirements",
                        to="exams.assessment",
                    ),
                ),
                (
                    "skill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requirements",
                        to="exams.skill",
                    ),
                ),
            ],
            options={
                "ordering": ["assessment", "order", "id"],
                "unique_together": {("assessment", "order"), ("assessment", "skill")},
            },
        ),
        migrations.AddField(
            model_name="assessment",
            name="skills",
            field=models.ManyToManyField(
                related_name="assessments", through="exams.AssessmentSkill", to="exams.skill"
            ),
        ),
        migrations.CreateModel(
            name="Assignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("filter_year_of_pass", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "filter_stream",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("ComputerScience", "Computer Science"),
                            ("Mechanical", "Mechanical"),
                            ("Electrical", "Electrical"),
                        ],
                        max_length=32,
                    ),
                ),
                ("filter_college", models.CharField(blank=True, max_length=255)),
                ("filter_date_of_registration", models.DateField(blank=True, null=True)),
                ("total_students", models.PositiveIntegerField(default=0)),
                ("attendees", models.PositiveIntegerField(default=0)),
                (
                    "assessment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assignments",
                        to="exams.assessment",
                    ),
                ),
            ],
            options={"ordering": ["-date", "-id"]},
        ),
        migrations.CreateModel(
            name="AssignmentStudent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("code", models.CharField(max_length=32)),
                ("attended", models.BooleanField(default=False)),
                ("start_time", models.DateTimeField(blank=True, null=True)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("marks", models.PositiveIntegerField(blank=True, null=True)),
                ("passed", models.BooleanField(blank=True, null=True)),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_students",
                        to="exams.assignment",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_sessions",
                        to="students.student",
                    ),
                ),
            ],
            options={
                "ordering": ["assignment", "id"],
                "unique_together": {("assignment", "student"), ("assignment", "code")},
            },
        ),
        migrations.CreateModel(
            name="SessionQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order", models.PositiveIntegerField()),
                (
                    "assignment_student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="session_questions",
                        to="exams.assignmentstudent",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="session_questions",
                        to="exams.question",
                    ),
                ),
            ],
            options={
                "ordering": ["assignment_student", "order"],
                "unique_together": {("assignment_student", "order"), ("assignment_student", "question")},
            },
        ),
        migrations.AddField(
            model_name="assignmentstudent",
            name="questions",
            field=models.ManyToManyField(
                related_name="sessions", through="exams.SessionQuestion", to="exams.question"
            ),
        ),
        migrations.CreateModel(
            name="AssignmentAnswer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("answer", models.TextField(blank=True)),
                ("correct", models.BooleanField(blank=True, null=True)),
                ("answer_time", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "assignment_student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="exams.assignmentstudent",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="exams.question",
                    ),
                ),
            ],
            options={
                "ordering": ["assignment_student", "question"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("assignment_student", "question"),
                        name="assignment_answer_session_question_unique",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="StudentLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("datetime", models.DateTimeField(default=django.utils.timezone.now)),
                ("assignment_id", models.BigIntegerField(blank=True, null=True)),
                ("assignment_student_id", models.BigIntegerField(blank=True, null=True)),
                (
                    "event",
                    models.CharField(
                        choices=[
                            ("login", "Login"),
                            ("exam_started", "Exam started"),
                            ("exam_finalized", "Exam finalized"),
                        ],
                        max_length=32,
                    ),
                ),
                ("details", models.JSONField(blank=True, default=dict)),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="logs",
                        to="students.student",
                    ),
                ),
            ],
            options={
                "ordering": ["datetime", "id"],
                "indexes": [models.Index(fields=["student", "event"], name="exams_stude_student_1f9b7d_idx")],
            },
        ),
    ]
