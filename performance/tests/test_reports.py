from __future__ import annotations

import pytest

from performance import reports
from performance.utils import record_marks


@pytest.mark.django_db
def test_enrolled_modules_show_marks_state(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    record_marks(student.pk, catalog.m1.pk, 30, 25)

    rows = reports.enrolled_modules(student)

    by_code = {r["code"]: r for r in rows}
    assert by_code["WD101"]["marks_entered"] is True
    assert by_code["WD101"]["grade"] == "Pass"
    assert by_code["WD101"]["enrollment_status"] == "Completed"
    assert by_code["WD102"]["marks_entered"] is False
    assert by_code["WD102"]["grade"] is None
    assert reports.enrolled_modules(student, course_id=catalog.c2.pk) == []


@pytest.mark.django_db
def test_progress_summary_counts_and_average(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    record_marks(student.pk, catalog.m1.pk, 45, 40)

    [row] = reports.progress_summary(student)

    assert row["course_name"] == "Web Design"
    assert row["total_enrolled_modules"] == 2
    assert row["completed_modules"] == 1
    assert row["failed_modules"] == 0
    assert row["pending_modules"] == 1
    assert row["completion_rate"] == 50.0
    assert row["average_total"] == 85
    assert row["average_grade"] == "Distinction"


@pytest.mark.django_db
def test_students_for_marks_entry_lists_registered_students(catalog, student, enrol):
    from students.models import Student

    Student.objects.create(first_name="Brian", last_name="Kamau")  # not enrolled
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    record_marks(student.pk, catalog.m1.pk, 30, 30)

    rows = reports.students_for_marks_entry()

    assert len(rows) == 1
    assert rows[0]["id"] == student.pk
    assert rows[0]["course_name"] == "Web Design"
    assert rows[0]["department_name"] == "ICT"
    assert rows[0]["enrolled_modules_count"] == 2
    assert rows[0]["completed_modules_count"] == 1
