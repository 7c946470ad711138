"""Performance records: theory/practical marks and the derived grade."""
from __future__ import annotations

from django.db import models

from .grading import Grade


class Performance(models.Model):
    """Marks for one student in one module.

    Exists only while the matching StudentModule is Completed or Failed;
    retraction deletes the row. `grade` is nullable for rows imported
    without one.
    """

    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="performance_records")
    module = models.ForeignKey("courses.Module", on_delete=models.CASCADE, related_name="performance_records")
    theory_marks = models.FloatField()
    practical_marks = models.FloatField()
    grade = models.CharField(max_length=15, choices=Grade.choices, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("student", "module")
        ordering = ["-id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Performance {self.student_id}/{self.module_id}: {self.total} ({self.grade})"

    @property
    def total(self) -> float:
        return (self.theory_marks or 0) + (self.practical_marks or 0)
