from __future__ import annotations

from datetime import date

import pytest

from enrollments.exceptions import EnrollmentBlocked, ValidationError
from enrollments.models import Enrollment, EnrollmentStatus, ModuleStatus, StudentModule
from enrollments.utils import ensure_can_enroll, sync_module_completion
from performance.models import Performance
from performance.utils import record_marks


def _graded_out_of_band(student, module, grade="Pass"):
    # Marks written directly, bypassing the recorder
    return Performance.objects.create(student=student, module=module, theory_marks=30, practical_marks=30, grade=grade)


@pytest.mark.django_db
def test_first_enrollment_is_allowed(catalog, student):
    assert ensure_can_enroll(student.pk, catalog.c1.pk) is None


@pytest.mark.django_db
def test_blocked_while_current_course_has_pending_modules(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    record_marks(student.pk, catalog.m1.pk, 30, 25)

    with pytest.raises(EnrollmentBlocked) as exc:
        ensure_can_enroll(student.pk, catalog.c2.pk)

    assert exc.value.status_code == 409
    assert exc.value.message == "Student must complete current course before enrolling in another"


@pytest.mark.django_db
def test_sync_pass_unblocks_out_of_band_marks(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    _graded_out_of_band(student, catalog.m1)
    _graded_out_of_band(student, catalog.m2)

    assert ensure_can_enroll(student.pk, catalog.c2.pk) is None
    assert set(StudentModule.objects.filter(student=student).values_list("status", flat=True)) == {ModuleStatus.COMPLETED}


@pytest.mark.django_db
def test_sync_pass_is_kept_when_still_blocked(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    _graded_out_of_band(student, catalog.m1)

    with pytest.raises(EnrollmentBlocked):
        ensure_can_enroll(student.pk, catalog.c2.pk)

    assert StudentModule.objects.get(student=student, module=catalog.m1).status == ModuleStatus.COMPLETED
    assert StudentModule.objects.get(student=student, module=catalog.m2).status == ModuleStatus.ENROLLED


@pytest.mark.django_db
def test_sync_pass_ignores_ungraded_records(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1])
    Performance.objects.create(student=student, module=catalog.m1, theory_marks=10, practical_marks=10, grade=None)

    assert sync_module_completion(student, [catalog.c1.pk]) == 0
    assert StudentModule.objects.get(student=student, module=catalog.m1).status == ModuleStatus.ENROLLED


@pytest.mark.django_db
def test_failed_module_with_grade_counts_as_done(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1])
    record_marks(student.pk, catalog.m1.pk, 10, 10)
    assert StudentModule.objects.get(student=student, module=catalog.m1).status == ModuleStatus.FAILED

    assert ensure_can_enroll(student.pk, catalog.c2.pk) is None
    assert StudentModule.objects.get(student=student, module=catalog.m1).status == ModuleStatus.COMPLETED


@pytest.mark.django_db
def test_returns_existing_enrollment_for_same_course(catalog, student, enrol):
    enrollment = enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    record_marks(student.pk, catalog.m1.pk, 30, 25)
    record_marks(student.pk, catalog.m2.pk, 45, 40)

    assert ensure_can_enroll(student.pk, catalog.c1.pk) == enrollment.pk


@pytest.mark.django_db
def test_dropped_enrollment_is_reused(catalog, student):
    dropped = Enrollment.objects.create(student=student, course=catalog.c2, status=EnrollmentStatus.DROPPED)

    assert ensure_can_enroll(student.pk, catalog.c2.pk) == dropped.pk


@pytest.mark.django_db
def test_completed_enrollment_is_not_reused(catalog, student):
    Enrollment.objects.create(student=student, course=catalog.c2, status=EnrollmentStatus.COMPLETED)

    assert ensure_can_enroll(student.pk, catalog.c2.pk) is None


@pytest.mark.django_db
def test_older_unrelated_course_does_not_block(catalog, student):
    Enrollment.objects.create(student=student, course=catalog.c3, enrollment_date=date(2024, 1, 10))
    StudentModule.objects.create(student=student, course=catalog.c3, level=catalog.l1, module=catalog.t1)
    Enrollment.objects.create(student=student, course=catalog.c1, enrollment_date=date(2025, 1, 10))
    StudentModule.objects.create(
        student=student, course=catalog.c1, level=catalog.l1, module=catalog.m1, status=ModuleStatus.COMPLETED
    )

    assert ensure_can_enroll(student.pk, catalog.c2.pk) is None


@pytest.mark.django_db
def test_pending_modules_in_target_course_block(catalog, student):
    StudentModule.objects.create(student=student, course=catalog.c2, level=catalog.l1, module=catalog.n1)

    with pytest.raises(EnrollmentBlocked):
        ensure_can_enroll(student.pk, catalog.c2.pk)


@pytest.mark.django_db
@pytest.mark.parametrize(
    "student_id,course_id,message",
    [
        (None, 1, "Missing required fields"),
        (1, "", "Missing required fields"),
        (999999, None, "Missing required fields"),
    ],
)
def test_missing_fields(catalog, student_id, course_id, message):
    with pytest.raises(ValidationError, match=message):
        ensure_can_enroll(student_id, course_id)


@pytest.mark.django_db
def test_unknown_student_and_course(catalog, student):
    with pytest.raises(ValidationError, match="Invalid student_id"):
        ensure_can_enroll(999999, catalog.c1.pk)
    with pytest.raises(ValidationError, match="Invalid course_id"):
        ensure_can_enroll(student.pk, "abc")
