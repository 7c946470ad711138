"""Catalog models: departments, branches, intakes, levels, courses, modules.

These are reference data for the enrollment workflow. A module belongs to
exactly one course and one level; the level's `level_order` sequences
progression display only and is never used to enforce prerequisites.
"""
from __future__ import annotations

from django.db import models


class Department(models.Model):
    name = models.CharField(max_length=150, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Branch(models.Model):
    name = models.CharField(max_length=150, unique=True)
    location = models.CharField(max_length=200, blank=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "branches"

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Intake(models.Model):
    """An admission window (e.g. "January 2025")."""

    intake_name = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField()
    term = models.CharField(max_length=50, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["-year", "term"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.intake_name} {self.year}"


class Level(models.Model):
    name = models.CharField(max_length=100)
    level_order = models.PositiveSmallIntegerField(default=1)
    duration = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["level_order", "id"]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Course(models.Model):
    """A course in the catalogue, optionally owned by a department."""

    department = models.ForeignKey(Department, on_delete=models.SET_NULL, null=True, blank=True, related_name="courses")
    name = models.CharField(max_length=200)
    code = models.CharField(max_length=30, blank=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Module(models.Model):
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="modules")
    level = models.ForeignKey(Level, on_delete=models.PROTECT, related_name="modules")
    code = models.CharField(max_length=30)
    title = models.CharField(max_length=200)

    class Meta:
        ordering = ["level__level_order", "title"]
        constraints = [
            models.UniqueConstraint(fields=["course", "code"], name="uniq_module_code_per_course"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} {self.title}"
