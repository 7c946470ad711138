"""A student finishing one course before moving to the next."""
from __future__ import annotations

import pytest

from enrollments.exceptions import EnrollmentBlocked
from enrollments.models import Enrollment, ModuleStatus, StudentModule
from performance.models import Performance
from performance.utils import record_marks


def _status(student, module):
    return StudentModule.objects.get(student=student, module=module).status


@pytest.mark.django_db
def test_course_must_be_finished_before_next_one(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    assert _status(student, catalog.m1) == ModuleStatus.ENROLLED
    assert _status(student, catalog.m2) == ModuleStatus.ENROLLED

    outcome = record_marks(student.pk, catalog.m1.pk, 30, 25)
    assert (outcome["total"], outcome["grade"]) == (55, "Pass")
    assert _status(student, catalog.m1) == ModuleStatus.COMPLETED

    with pytest.raises(EnrollmentBlocked):
        enrol(student, catalog.c2, catalog.l1, [catalog.n1])

    outcome = record_marks(student.pk, catalog.m2.pk, 45, 40)
    assert (outcome["total"], outcome["grade"]) == (85, "Distinction")
    assert _status(student, catalog.m2) == ModuleStatus.COMPLETED

    enrollment = enrol(student, catalog.c2, catalog.l1, [catalog.n1])

    assert enrollment.course_id == catalog.c2.pk
    assert Enrollment.objects.filter(student=student).count() == 2
    assert Performance.objects.filter(student=student).count() == 2
    student.refresh_from_db()
    assert student.department_id == catalog.hospitality.pk
