"""Student records.

Registration and profile editing are plain CRUD. The enrollment workflow
only reads students, except for `department`, which follows the course the
student last enrolled in.
"""
from __future__ import annotations

from django.db import models
from django.utils import timezone


class StudentStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    INACTIVE = "Inactive", "Inactive"


class Student(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=16, choices=StudentStatus.choices, default=StudentStatus.ACTIVE)
    department = models.ForeignKey("courses.Department", on_delete=models.SET_NULL, null=True, blank=True, related_name="students")
    branch = models.ForeignKey("courses.Branch", on_delete=models.SET_NULL, null=True, blank=True, related_name="students")
    admission_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["first_name", "last_name"]

    def __str__(self) -> str:  # pragma: no cover
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
