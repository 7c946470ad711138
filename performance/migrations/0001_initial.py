from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("courses", "0001_initial"),
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Performance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("theory_marks", models.FloatField()),
                ("practical_marks", models.FloatField()),
                ("grade", models.CharField(blank=True, choices=[("Distinction", "Distinction"), ("Credit", "Credit"), ("Pass", "Pass"), ("Fail", "Fail")], max_length=15, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("module", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="performance_records", to="courses.module")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="performance_records", to="students.student")),
            ],
            options={
                "ordering": ["-id"],
                "unique_together": {("student", "module")},
            },
        ),
    ]
