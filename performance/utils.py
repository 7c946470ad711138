from __future__ import annotations

import logging
import math
from typing import Any

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.utils import timezone

from activity.models import Activity
from courses.models import Module
from enrollments.exceptions import (
    AlreadyFinalized,
    EnrollmentMissing,
    ModuleNotRegistered,
    NotFound,
    StorageError,
    ValidationError,
)
from enrollments.models import Enrollment, ModuleStatus, StudentModule
from enrollments.utils import as_id, is_blank, resolve
from students.models import Student

from .grading import MAX_COMPONENT_MARKS, grade_for_total, is_valid_component, status_for_total
from .models import Performance

logger = logging.getLogger(__name__)

MARKS_RANGE_MESSAGE = f"Marks must be between 0 and {MAX_COMPONENT_MARKS}"


def _as_marks(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(MARKS_RANGE_MESSAGE)
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ValidationError(f"{MARKS_RANGE_MESSAGE}; got {value!r}") from None
    if not isinstance(value, (int, float)) or math.isnan(value) or not is_valid_component(value):
        raise ValidationError(MARKS_RANGE_MESSAGE)
    return value


def record_marks(
    student_id: Any,
    module_id: Any,
    theory_marks: Any,
    practical_marks: Any,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> dict[str, Any]:
    """Record theory/practical marks for a student's module.

    Checks, in order: all fields present, marks in range, student exists,
    module exists, the student is registered for the module (telling apart
    "not enrolled in the course" from "enrolled but not in this module"),
    and the module is not already Completed/Failed. Then upserts the
    performance record, finalises the module status and logs a `result`
    activity, all in one transaction.

    Returns the echoed marks with the computed total, grade and new status.
    """
    if any(is_blank(v) for v in (student_id, module_id, theory_marks, practical_marks)):
        raise ValidationError(
            "Missing required fields: student_id, module_id, theory_marks, and practical_marks are required"
        )
    theory = _as_marks(theory_marks)
    practical = _as_marks(practical_marks)

    try:
        with transaction.atomic(using=using):
            outcome = _record(student_id, module_id, theory, practical, using)
    except DatabaseError as exc:
        logger.exception("Recording marks for student %s module %s failed", student_id, module_id)
        raise StorageError() from exc

    logger.info(
        "Marks recorded for student %s module %s: total=%s grade=%s status=%s",
        outcome["student_id"],
        outcome["module_id"],
        outcome["total"],
        outcome["grade"],
        outcome["new_status"],
    )
    return outcome


def _record(student_id, module_id, theory: float, practical: float, using: str) -> dict[str, Any]:
    student = resolve(Student, student_id, using=using)
    if student is None:
        raise ValidationError("Invalid student_id")
    module = resolve(Module, module_id, using=using)
    if module is None:
        raise ValidationError("Invalid module_id")

    registration = (
        StudentModule.objects.using(using)
        .select_for_update()
        .filter(student=student, module=module)
        .first()
    )
    if registration is None:
        in_course = Enrollment.objects.using(using).filter(student=student, course_id=module.course_id).exists()
        if not in_course:
            raise EnrollmentMissing(
                f'Student "{student.full_name}" is not enrolled in the course that contains module "{module.title}"'
            )
        raise ModuleNotRegistered(
            f'Student "{student.full_name}" is enrolled in the course but not registered for module '
            f'"{module.title}". Please enroll the student in this module first.'
        )
    if registration.is_final:
        raise AlreadyFinalized(
            f'Cannot enter marks for module "{module.title}" because it is already marked as '
            f'"{registration.status}". Retract the existing marks before entering new ones.'
        )

    total = theory + practical
    grade = grade_for_total(total)
    new_status = status_for_total(total)

    Performance.objects.using(using).update_or_create(
        student=student,
        module=module,
        defaults={"theory_marks": theory, "practical_marks": practical, "grade": grade},
    )
    registration.status = new_status
    registration.completion_date = timezone.localdate()
    registration.save(update_fields=["status", "completion_date"])

    Activity.objects.using(using).create(
        student=student,
        action=f'Marks entered for "{module.title}" (Grade: {grade})',
        course=f"Module: {module.code}",
        type=Activity.TYPE_RESULT,
    )
    return {
        "student_id": student.pk,
        "module_id": module.pk,
        "theory_marks": theory,
        "practical_marks": practical,
        "total": total,
        "grade": str(grade),
        "module_title": module.title,
        "new_status": str(new_status),
    }


def retract_marks(student_id: Any, module_id: Any, *, using: str = DEFAULT_DB_ALIAS) -> dict[str, Any]:
    """Delete a student's marks for a module and reopen the module.

    The StudentModule goes back to Enrolled with no completion date, so
    marks can be recorded again. Raises `NotFound` when no record exists.
    """
    try:
        with transaction.atomic(using=using):
            details = _retract(student_id, module_id, using)
    except DatabaseError as exc:
        logger.exception("Retracting marks for student %s module %s failed", student_id, module_id)
        raise StorageError() from exc

    logger.info("Marks retracted for student %s module %s", student_id, module_id)
    return details


def _retract(student_id, module_id, using: str) -> dict[str, Any]:
    student_pk, module_pk = as_id(student_id), as_id(module_id)
    record = None
    if student_pk is not None and module_pk is not None:
        record = (
            Performance.objects.using(using)
            .select_for_update()
            .filter(student_id=student_pk, module_id=module_pk)
            .first()
        )
    if record is None:
        raise NotFound()

    student = Student.objects.using(using).get(pk=record.student_id)
    module = Module.objects.using(using).get(pk=record.module_id)

    record.delete()
    reset = (
        StudentModule.objects.using(using)
        .filter(student=student, module=module)
        .update(status=ModuleStatus.ENROLLED, completion_date=None)
    )

    Activity.objects.using(using).create(
        student=student,
        action=f'Marks deleted for "{module.title}"',
        course=f"Module: {module.code}",
        type=Activity.TYPE_RESULT,
    )
    return {
        "student": student.full_name,
        "module": module.title,
        "marks_deleted": True,
        "status_reset": reset > 0,
    }
