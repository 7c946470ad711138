"""Read-only projections used by the marks-entry screens.

These never write; they join enrollments, module registrations and
performance records into the shapes the front end consumes.
"""
from __future__ import annotations

from typing import Any

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Count

from enrollments.models import ACTIVE_ENROLLMENT_STATUSES, Enrollment, ModuleStatus, StudentModule
from students.models import Student

from .grading import grade_for_total
from .models import Performance


def students_for_marks_entry(*, using: str = DEFAULT_DB_ALIAS) -> list[dict[str, Any]]:
    """Students with an active enrollment and at least one registered module."""
    enrollments = (
        Enrollment.objects.using(using)
        .filter(status__in=ACTIVE_ENROLLMENT_STATUSES)
        .select_related("student", "course__department")
    )
    registered = {
        (row["student_id"], row["course_id"]): row["n"]
        for row in StudentModule.objects.using(using).order_by().values("student_id", "course_id").annotate(n=Count("id"))
    }
    graded = {
        (row["student_id"], row["module__course_id"]): row["n"]
        for row in Performance.objects.using(using).order_by().values("student_id", "module__course_id").annotate(n=Count("id"))
    }
    rows = []
    for e in enrollments:
        key = (e.student_id, e.course_id)
        if not registered.get(key):
            continue
        department = e.course.department
        rows.append(
            {
                "id": e.student_id,
                "first_name": e.student.first_name,
                "last_name": e.student.last_name,
                "course_id": e.course_id,
                "course_name": e.course.name,
                "department_name": department.name if department else None,
                "enrolled_modules_count": registered[key],
                "completed_modules_count": graded.get(key, 0),
            }
        )
    rows.sort(key=lambda r: (r["first_name"], r["last_name"], r["course_name"]))
    return rows


def enrolled_modules(student: Student, course_id: int | None = None, *, using: str = DEFAULT_DB_ALIAS) -> list[dict[str, Any]]:
    """A student's registered modules with any marks already entered."""
    qs = (
        StudentModule.objects.using(using)
        .filter(student=student)
        .select_related("module", "level", "course")
        .order_by("level__level_order", "module__title")
    )
    if course_id is not None:
        qs = qs.filter(course_id=course_id)
    marks = {p.module_id: p for p in Performance.objects.using(using).filter(student=student)}
    rows = []
    for sm in qs:
        p = marks.get(sm.module_id)
        rows.append(
            {
                "id": sm.module_id,
                "title": sm.module.title,
                "code": sm.module.code,
                "level_name": sm.level.name,
                "level_order": sm.level.level_order,
                "enrollment_status": sm.status,
                "grade": p.grade if p else None,
                "theory_marks": p.theory_marks if p else None,
                "practical_marks": p.practical_marks if p else None,
                "marks_id": p.pk if p else None,
                "marks_entered": p is not None,
                "course_name": sm.course.name,
            }
        )
    return rows


def progress_summary(student: Student, *, using: str = DEFAULT_DB_ALIAS) -> list[dict[str, Any]]:
    """Per active enrollment: module counts, completion rate and average grade."""
    enrollments = (
        Enrollment.objects.using(using)
        .filter(student=student, status__in=ACTIVE_ENROLLMENT_STATUSES)
        .select_related("course")
        .order_by("course__name")
    )
    summary = []
    for e in enrollments:
        statuses = list(
            StudentModule.objects.using(using)
            .filter(student=student, course=e.course)
            .values_list("status", flat=True)
        )
        total = len(statuses)
        completed = statuses.count(ModuleStatus.COMPLETED)
        failed = statuses.count(ModuleStatus.FAILED)
        pending = sum(1 for s in statuses if s in (ModuleStatus.ENROLLED, ModuleStatus.ONGOING))
        totals = [
            p.total for p in Performance.objects.using(using).filter(student=student, module__course=e.course)
        ]
        average = round(sum(totals) / len(totals), 2) if totals else None
        summary.append(
            {
                "course_id": e.course_id,
                "course_name": e.course.name,
                "total_enrolled_modules": total,
                "completed_modules": completed,
                "failed_modules": failed,
                "pending_modules": pending,
                "completion_rate": round(completed * 100.0 / total, 2) if total else 0.0,
                "average_total": average,
                "average_grade": str(grade_for_total(average)) if average is not None else None,
            }
        )
    return summary
