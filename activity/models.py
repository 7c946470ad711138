"""Activity models: append-only audit log of workflow events."""
from __future__ import annotations

from django.db import models


class Activity(models.Model):
    TYPE_ENROLLMENT = "enrollment"
    TYPE_RESULT = "result"
    TYPE_CHOICES = (
        (TYPE_ENROLLMENT, "Enrollment"),
        (TYPE_RESULT, "Result"),
    )

    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="activities")
    action = models.CharField(max_length=255)
    # Free-text context, e.g. a course name or "Module: WD101"
    course = models.CharField(max_length=200, blank=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "activities"

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}:{self.type}:{self.action[:20]}"
