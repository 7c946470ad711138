from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("students", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=255)),
                ("course", models.CharField(blank=True, max_length=200)),
                ("type", models.CharField(choices=[("enrollment", "Enrollment"), ("result", "Result")], max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="activities", to="students.student")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "verbose_name_plural": "activities",
            },
        ),
    ]
