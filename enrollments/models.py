"""Enrollment models: course enrollments and per-module registrations.

An `Enrollment` links a student to a course. A `StudentModule` registers
the student for one module of that course at a given level; its status
moves to Completed/Failed when marks are recorded and back to Enrolled
when they are retracted.
"""
from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone


class EnrollmentStatus(models.TextChoices):
    ENROLLED = "Enrolled", "Enrolled"
    ONGOING = "Ongoing", "Ongoing"
    COMPLETED = "Completed", "Completed"
    DROPPED = "Dropped", "Dropped"


class ModuleStatus(models.TextChoices):
    ENROLLED = "Enrolled", "Enrolled"
    ONGOING = "Ongoing", "Ongoing"
    COMPLETED = "Completed", "Completed"
    FAILED = "Failed", "Failed"


ACTIVE_ENROLLMENT_STATUSES = (EnrollmentStatus.ENROLLED, EnrollmentStatus.ONGOING)
FINAL_MODULE_STATUSES = (ModuleStatus.COMPLETED, ModuleStatus.FAILED)


class Enrollment(models.Model):
    """A student's registration in a course.

    At most one active (not Completed, not Dropped) enrollment exists per
    student and course; re-enrolling updates that row in place.
    """

    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="enrollments")
    course = models.ForeignKey("courses.Course", on_delete=models.CASCADE, related_name="enrollments")
    intake = models.ForeignKey("courses.Intake", on_delete=models.SET_NULL, null=True, blank=True, related_name="enrollments")
    branch = models.ForeignKey("courses.Branch", on_delete=models.SET_NULL, null=True, blank=True, related_name="enrollments")
    enrollment_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=16, choices=EnrollmentStatus.choices, default=EnrollmentStatus.ENROLLED)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-enrollment_date", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "course"],
                condition=~Q(status__in=["Completed", "Dropped"]),
                name="uniq_active_enrollment",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}->{self.course_id} ({self.status})"


class StudentModule(models.Model):
    student = models.ForeignKey("students.Student", on_delete=models.CASCADE, related_name="student_modules")
    course = models.ForeignKey("courses.Course", on_delete=models.CASCADE, related_name="student_modules")
    level = models.ForeignKey("courses.Level", on_delete=models.PROTECT, related_name="student_modules")
    module = models.ForeignKey("courses.Module", on_delete=models.CASCADE, related_name="student_modules")
    status = models.CharField(max_length=16, choices=ModuleStatus.choices, default=ModuleStatus.ENROLLED)
    enrollment_date = models.DateField(default=timezone.localdate)
    completion_date = models.DateField(null=True, blank=True)

    class Meta:
        unique_together = ("student", "module")
        ordering = ["level__level_order", "module__title"]
        indexes = [
            models.Index(fields=["student", "course"], name="enr_sm_student_course_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}:{self.module_id} ({self.status})"

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_MODULE_STATUSES
