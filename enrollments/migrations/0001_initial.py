from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("courses", "0001_initial"),
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enrollment_date", models.DateField(default=django.utils.timezone.localdate)),
                ("status", models.CharField(choices=[("Enrolled", "Enrolled"), ("Ongoing", "Ongoing"), ("Completed", "Completed"), ("Dropped", "Dropped")], default="Enrolled", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("branch", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="enrollments", to="courses.branch")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="courses.course")),
                ("intake", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="enrollments", to="courses.intake")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="students.student")),
            ],
            options={
                "ordering": ["-enrollment_date", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="enrollment",
            constraint=models.UniqueConstraint(
                condition=models.Q(("status__in", ["Completed", "Dropped"]), _negated=True),
                fields=("student", "course"),
                name="uniq_active_enrollment",
            ),
        ),
        migrations.CreateModel(
            name="StudentModule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("Enrolled", "Enrolled"), ("Ongoing", "Ongoing"), ("Completed", "Completed"), ("Failed", "Failed")], default="Enrolled", max_length=16)),
                ("enrollment_date", models.DateField(default=django.utils.timezone.localdate)),
                ("completion_date", models.DateField(blank=True, null=True)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="student_modules", to="courses.course")),
                ("level", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="student_modules", to="courses.level")),
                ("module", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="student_modules", to="courses.module")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="student_modules", to="students.student")),
            ],
            options={
                "ordering": ["level__level_order", "module__title"],
                "unique_together": {("student", "module")},
            },
        ),
        migrations.AddIndex(
            model_name="studentmodule",
            index=models.Index(fields=["student", "course"], name="enr_sm_student_course_idx"),
        ),
    ]
