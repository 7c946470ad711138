"""Enrollment guard and module enrollment.

The guard is a two-phase step: it first reconciles module status with
marks that were recorded out of band (the sync pass), then decides whether
the student may enrol. Callers rely on the reconciliation even when the
decision is a rejection.

Every public function takes `using`, the database alias to run against,
and performs its writes inside a single `transaction.atomic` block on it.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.db.models import Exists, OuterRef
from django.utils import timezone
from rest_framework import serializers

from activity.models import Activity
from courses.models import Branch, Course, Intake, Level, Module
from performance.models import Performance
from students.models import Student

from .exceptions import EnrollmentBlocked, StorageError, ValidationError
from .models import ACTIVE_ENROLLMENT_STATUSES, Enrollment, EnrollmentStatus, ModuleStatus, StudentModule

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


_ID_FIELD = serializers.IntegerField()


def as_id(value: Any) -> int | None:
    """Coerce a request value to an integer id; None for blanks, fractions and junk."""
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        return _ID_FIELD.to_internal_value(value)
    except serializers.ValidationError:
        return None


def resolve(model, pk: Any, *, using: str = DEFAULT_DB_ALIAS):
    """Fetch `model` by primary key, or None when absent or malformed."""
    pk = as_id(pk)
    if pk is None:
        return None
    return model._default_manager.using(using).filter(pk=pk).first()


def current_course_id(student: Student, *, using: str = DEFAULT_DB_ALIAS) -> int | None:
    """Course of the student's most recent Enrolled/Ongoing enrollment."""
    return (
        Enrollment.objects.using(using)
        .filter(student=student, status__in=ACTIVE_ENROLLMENT_STATUSES)
        .order_by("-enrollment_date", "-id")
        .values_list("course_id", flat=True)
        .first()
    )


def sync_module_completion(student: Student, course_ids: Iterable[int], *, using: str = DEFAULT_DB_ALIAS) -> int:
    """Mark modules Completed where a graded performance record already exists.

    Returns the number of StudentModule rows promoted.
    """
    graded = Performance.objects.using(using).filter(
        student_id=OuterRef("student_id"),
        module_id=OuterRef("module_id"),
        grade__isnull=False,
    )
    with transaction.atomic(using=using):
        return (
            StudentModule.objects.using(using)
            .filter(student=student, course_id__in=list(course_ids))
            .exclude(status=ModuleStatus.COMPLETED)
            .filter(Exists(graded))
            .update(status=ModuleStatus.COMPLETED)
        )


def _reusable_enrollment_id(student: Student, course: Course, using: str) -> int | None:
    qs = Enrollment.objects.using(using).filter(student=student, course=course).order_by("-id")
    # Prefer the active row; the partial unique constraint allows at most one
    active = qs.filter(status__in=ACTIVE_ENROLLMENT_STATUSES).values_list("id", flat=True).first()
    if active is not None:
        return active
    return qs.filter(status=EnrollmentStatus.DROPPED).values_list("id", flat=True).first()


def _guard(student: Student, course: Course, using: str) -> int | None:
    course_ids = {course.pk}
    current = current_course_id(student, using=using)
    if current is not None:
        course_ids.add(current)

    promoted = sync_module_completion(student, course_ids, using=using)
    if promoted:
        logger.info("Sync pass promoted %s module(s) to Completed for student %s", promoted, student.pk)

    pending = (
        StudentModule.objects.using(using)
        .filter(student=student, course_id__in=course_ids)
        .exclude(status=ModuleStatus.COMPLETED)
    )
    if pending.exists():
        logger.warning("Enrollment of student %s in course %s blocked by incomplete modules", student.pk, course.pk)
        raise EnrollmentBlocked()
    return _reusable_enrollment_id(student, course, using)


def ensure_can_enroll(student_id: Any, course_id: Any, *, using: str = DEFAULT_DB_ALIAS) -> int | None:
    """Decide whether a student may be enrolled in a course.

    Runs the sync pass, then raises `EnrollmentBlocked` if any module of
    the target course or of the student's current course is still not
    Completed. Otherwise returns the id of an existing non-Completed
    enrollment to update in place, or None when a new one should be
    created. The sync pass is committed even when the student is blocked.
    """
    if is_blank(student_id) or is_blank(course_id):
        raise ValidationError("Missing required fields: student_id and course_id are required")
    student = resolve(Student, student_id, using=using)
    if student is None:
        raise ValidationError("Invalid student_id")
    course = resolve(Course, course_id, using=using)
    if course is None:
        raise ValidationError("Invalid course_id")
    try:
        return _guard(student, course, using)
    except DatabaseError as exc:
        logger.exception("Enrollment check failed for student %s", student_id)
        raise StorageError() from exc


def _module_ids(raw: Any) -> list[int]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValidationError("module_ids must be a non-empty list")
    ids: list[int] = []
    for value in raw:
        pk = as_id(value)
        if pk is None:
            raise ValidationError(f"Invalid module id: {value!r}")
        ids.append(pk)
    # Keep first-seen order, drop duplicates
    return list(dict.fromkeys(ids))


def enroll_student(
    student_id: Any,
    course_id: Any,
    level_id: Any,
    intake_id: Any,
    branch_id: Any,
    module_ids: Any,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> Enrollment:
    """Enrol a student in a course and register them for the given modules.

    All writes (enrollment row, module registrations, the student's
    department and the activity entry) happen in one transaction; any
    rejection or database failure leaves nothing behind.
    """
    required = {
        "student_id": student_id,
        "course_id": course_id,
        "level_id": level_id,
        "intake_id": intake_id,
        "branch_id": branch_id,
    }
    missing = [name for name, value in required.items() if is_blank(value)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    wanted = _module_ids(module_ids)

    try:
        with transaction.atomic(using=using):
            enrollment = _enroll(student_id, course_id, level_id, intake_id, branch_id, wanted, using)
    except DatabaseError as exc:
        logger.exception("Enrollment of student %s in course %s failed", student_id, course_id)
        raise StorageError() from exc

    logger.info(
        "Enrolled student %s in course %s (enrollment %s, %s module(s))",
        enrollment.student_id,
        enrollment.course_id,
        enrollment.pk,
        len(wanted),
    )
    return enrollment


def _enroll(student_id, course_id, level_id, intake_id, branch_id, wanted: list[int], using: str) -> Enrollment:
    lookups = (
        ("student_id", Student, student_id),
        ("course_id", Course, course_id),
        ("level_id", Level, level_id),
        ("intake_id", Intake, intake_id),
        ("branch_id", Branch, branch_id),
    )
    found = {}
    for name, model, pk in lookups:
        obj = resolve(model, pk, using=using)
        if obj is None:
            raise ValidationError(f"Invalid {name}")
        found[name] = obj
    student: Student = found["student_id"]
    course: Course = found["course_id"]
    level: Level = found["level_id"]

    modules = {m.pk: m for m in Module.objects.using(using).filter(pk__in=wanted)}
    unknown = [pk for pk in wanted if pk not in modules]
    if unknown:
        raise ValidationError(f"Invalid module_ids: {', '.join(str(pk) for pk in unknown)}")
    outside = [m for m in modules.values() if m.course_id != course.pk or m.level_id != level.pk]
    if outside:
        titles = ", ".join(f'"{m.title}"' for m in outside)
        raise ValidationError(f'Modules {titles} do not belong to course "{course.name}" at level "{level.name}"')

    existing_id = _guard(student, course, using)

    already = (
        StudentModule.objects.using(using)
        .filter(student=student, module_id__in=wanted)
        .select_related("module")
    )
    if already:
        titles = ", ".join(f'"{sm.module.title}"' for sm in already)
        raise ValidationError(f"Student is already registered for {titles}")

    today = timezone.localdate()
    if existing_id is not None:
        Enrollment.objects.using(using).filter(pk=existing_id).update(
            intake=found["intake_id"],
            branch=found["branch_id"],
            enrollment_date=today,
            status=EnrollmentStatus.ENROLLED,
        )
        enrollment = Enrollment.objects.using(using).get(pk=existing_id)
    else:
        enrollment = Enrollment.objects.using(using).create(
            student=student,
            course=course,
            intake=found["intake_id"],
            branch=found["branch_id"],
            enrollment_date=today,
            status=EnrollmentStatus.ENROLLED,
        )

    StudentModule.objects.using(using).bulk_create(
        [
            StudentModule(
                student=student,
                course=course,
                level=level,
                module=modules[pk],
                status=ModuleStatus.ENROLLED,
                enrollment_date=today,
            )
            for pk in wanted
        ]
    )

    if course.department_id and student.department_id != course.department_id:
        student.department_id = course.department_id
        student.save(update_fields=["department", "updated_at"])

    Activity.objects.using(using).create(
        student=student,
        action=f"Enrolled in {len(wanted)} module(s) at {level.name}",
        course=course.name,
        type=Activity.TYPE_ENROLLMENT,
    )
    return enrollment
