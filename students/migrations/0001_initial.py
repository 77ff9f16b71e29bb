from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("mobile", models.CharField(blank=True, max_length=32)),
                ("year_of_pass", models.PositiveIntegerField()),
                ("date_of_registration", models.DateField()),
                (
                    "stream",
                    models.CharField(
                        choices=[
                            ("ComputerScience", "Computer Science"),
                            ("Mechanical", "Mechanical"),
                            ("Electrical", "Electrical"),
                        ],
                        max_length=32,
                    ),
                ),
                ("college", models.CharField(blank=True, max_length=255)),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["year_of_pass", "stream"], name="students_st_year_of_4b1f0e_idx"),
                    models.Index(fields=["college"], name="students_st_college_8c2d51_idx"),
                ],
            },
        ),
    ]
