import logging
from types import SimpleNamespace

import pytest


@pytest.fixture(autouse=True)
def silence_django_request_logger():
    """Reduce noise from expected 4xx in passing tests.

    Many tests intentionally exercise 400/404/409 paths to validate the
    workflow rules. Django logs these at WARNING via 'django.request'.
    Lower that logger to ERROR during tests to avoid clutter.
    """
    logger = logging.getLogger("django.request")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture
def catalog(db):
    """Two departments' worth of reference data.

    C1 (ICT) has M1, M2 at level 1 and M3 at level 2; C2 (Hospitality)
    has N1 at level 1; C3 (Tailoring) has T1 at level 1.
    """
    from courses.models import Branch, Course, Department, Intake, Level, Module

    ict = Department.objects.create(name="ICT")
    hospitality = Department.objects.create(name="Hospitality")
    branch = Branch.objects.create(name="Main Campus", location="Town centre")
    intake = Intake.objects.create(intake_name="January", year=2025, term="1")
    l1 = Level.objects.create(name="Level 1", level_order=1)
    l2 = Level.objects.create(name="Level 2", level_order=2)
    c1 = Course.objects.create(name="Web Design", code="WD", department=ict)
    c2 = Course.objects.create(name="Food Production", code="FP", department=hospitality)
    c3 = Course.objects.create(name="Tailoring", code="TL", department=hospitality)
    return SimpleNamespace(
        ict=ict,
        hospitality=hospitality,
        branch=branch,
        intake=intake,
        l1=l1,
        l2=l2,
        c1=c1,
        c2=c2,
        c3=c3,
        m1=Module.objects.create(course=c1, level=l1, code="WD101", title="HTML Basics"),
        m2=Module.objects.create(course=c1, level=l1, code="WD102", title="CSS Layout"),
        m3=Module.objects.create(course=c1, level=l2, code="WD201", title="JavaScript"),
        n1=Module.objects.create(course=c2, level=l1, code="FP101", title="Kitchen Hygiene"),
        t1=Module.objects.create(course=c3, level=l1, code="TL101", title="Pattern Drafting"),
    )


@pytest.fixture
def student(db):
    from students.models import Student

    return Student.objects.create(first_name="Amina", last_name="Otieno", email="amina@example.com")


@pytest.fixture
def enrol(catalog):
    """Enrol a student through the workflow with the catalog's intake and branch."""
    from enrollments.utils import enroll_student

    def _enrol(student, course, level, modules):
        return enroll_student(
            student.pk,
            course.pk,
            level.pk,
            catalog.intake.pk,
            catalog.branch.pk,
            [m.pk for m in modules],
        )

    return _enrol
