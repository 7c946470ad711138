from __future__ import annotations

import logging
from unittest import mock

import pytest
from django.db import DatabaseError
from rest_framework.test import APIClient

from enrollments.models import ModuleStatus, StudentModule
from performance.models import Performance


@pytest.fixture
def enrolled(catalog, student, enrol):
    enrol(student, catalog.c1, catalog.l1, [catalog.m1, catalog.m2])
    return student


def _marks(student, module, theory, practical):
    return {"student_id": student.pk, "module_id": module.pk, "theory_marks": theory, "practical_marks": practical}


@pytest.mark.django_db
def test_record_marks_returns_outcome(catalog, enrolled):
    c = APIClient()

    r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 45, 40), format="json")

    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Marks added or updated successfully"
    assert body["total"] == 85
    assert body["grade"] == "Distinction"
    assert body["new_status"] == "Completed"
    assert body["module_title"] == "HTML Basics"
    assert body["student_id"] == enrolled.pk


@pytest.mark.django_db
def test_out_of_range_marks_are_rejected(catalog, enrolled):
    c = APIClient()

    r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 51, 10), format="json")

    assert r.status_code == 400
    assert r.json() == {"error": "Marks must be between 0 and 50"}
    assert not Performance.objects.exists()


@pytest.mark.django_db
def test_unregistered_module_message(catalog, enrolled):
    c = APIClient()

    r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m3, 30, 30), format="json")

    assert r.status_code == 400
    assert "not registered for module" in r.json()["error"]


@pytest.mark.django_db
def test_finalized_module_cannot_be_remarked(catalog, enrolled):
    c = APIClient()
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 30), format="json")

    r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 40, 40), format="json")

    assert r.status_code == 400
    assert "already marked as" in r.json()["error"]


@pytest.mark.django_db
def test_retract_then_reenter(catalog, enrolled):
    c = APIClient()
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 30), format="json")

    r = c.delete(f"/api/v1/marks/{enrolled.pk}/{catalog.m1.pk}/")

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Record deleted successfully"
    assert body["details"]["marks_deleted"] is True
    assert StudentModule.objects.get(student=enrolled, module=catalog.m1).status == ModuleStatus.ENROLLED

    r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 40, 40), format="json")
    assert r.status_code == 201


@pytest.mark.django_db
def test_retract_missing_record_is_404(catalog, enrolled):
    c = APIClient()

    r = c.delete(f"/api/v1/marks/{enrolled.pk}/{catalog.m2.pk}/")

    assert r.status_code == 404
    assert r.json() == {"error": "Record not found"}


@pytest.mark.django_db
def test_marks_list_filters_and_annotates_status(catalog, enrolled):
    c = APIClient()
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 30), format="json")
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m2, 10, 10), format="json")

    r = c.get(f"/api/v1/marks/?student_id={enrolled.pk}&grade=Fail")

    assert r.status_code == 200
    [row] = r.json()["results"]
    assert row["module_code"] == "WD102"
    assert row["total"] == 20
    assert row["enrollment_status"] == "Failed"
    assert row["course_name"] == "Web Design"

    r = c.get(f"/api/v1/marks/?course_id={catalog.c2.pk}")
    assert r.json()["results"] == []


@pytest.mark.django_db
def test_marks_students_lists_enrolled_students(catalog, enrolled):
    c = APIClient()

    r = c.get("/api/v1/marks/students/")

    assert r.status_code == 200
    [row] = r.json()
    assert row["id"] == enrolled.pk
    assert row["enrolled_modules_count"] == 2


@pytest.mark.django_db
def test_student_modules_for_course_only_open_modules(catalog, enrolled):
    c = APIClient()
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 30), format="json")

    r = c.get(f"/api/v1/student-modules/{enrolled.pk}/{catalog.c1.pk}/")
    assert r.status_code == 200
    assert [row["module_id"] for row in r.json()] == [catalog.m2.pk]

    r = c.get(f"/api/v1/student-modules/{enrolled.pk}/{catalog.c1.pk}/{catalog.l2.pk}/")
    assert r.json() == []

    r = c.get(f"/api/v1/student-modules/999999/{catalog.c1.pk}/")
    assert r.status_code == 404


@pytest.mark.django_db
def test_student_modules_and_progress_actions(catalog, enrolled):
    c = APIClient()
    c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 25), format="json")

    r = c.get(f"/api/v1/students/{enrolled.pk}/modules/?course_id={catalog.c1.pk}")
    assert r.status_code == 200
    assert [row["marks_entered"] for row in r.json()] == [False, True]

    r = c.get(f"/api/v1/students/{enrolled.pk}/progress/")
    assert r.status_code == 200
    [summary] = r.json()
    assert summary["completed_modules"] == 1
    assert summary["pending_modules"] == 1
    assert summary["completion_rate"] == 50.0


@pytest.mark.django_db
def test_student_modules_rejects_malformed_course_id(catalog, enrolled):
    c = APIClient()

    r = c.get(f"/api/v1/students/{enrolled.pk}/modules/?course_id=abc")

    assert r.status_code == 400
    assert r.json() == {"error": "course_id must be an integer id"}


@pytest.mark.django_db
def test_storage_failure_is_500_and_logged_once(catalog, enrolled):
    failing = mock.MagicMock()
    failing.objects.using.return_value.create.side_effect = DatabaseError("disk full")
    c = APIClient()

    with mock.patch("performance.utils.Activity", failing), mock.patch.object(
        logging.Logger, "error", autospec=True
    ) as error:
        r = c.post("/api/v1/marks/", _marks(enrolled, catalog.m1, 30, 30), format="json")

    assert r.status_code == 500
    assert r.json() == {"error": "The database rejected the operation; no changes were saved."}
    by_logger = [call.args[0].name for call in error.call_args_list]
    assert by_logger.count("performance.utils") == 1
    assert not any(name.startswith("api") for name in by_logger)
    assert not Performance.objects.exists()
