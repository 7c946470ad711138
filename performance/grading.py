"""Grade bucketing for module marks.

Every caller that needs a grade or the resulting module status (marks
entry, progress summaries, the regrade command) goes through these two
functions so the thresholds live in one place.
"""
from __future__ import annotations

from django.db import models

from enrollments.models import ModuleStatus

MAX_COMPONENT_MARKS = 50
DISTINCTION_MIN = 80
CREDIT_MIN = 65
PASS_MIN = 50


class Grade(models.TextChoices):
    DISTINCTION = "Distinction", "Distinction"
    CREDIT = "Credit", "Credit"
    PASS = "Pass", "Pass"
    FAIL = "Fail", "Fail"


def grade_for_total(total: float) -> str:
    """Map a total out of 100 to its grade band."""
    if total >= DISTINCTION_MIN:
        return Grade.DISTINCTION
    if total >= CREDIT_MIN:
        return Grade.CREDIT
    if total >= PASS_MIN:
        return Grade.PASS
    return Grade.FAIL


def status_for_total(total: float) -> str:
    """Module status once marks totalling `total` are recorded."""
    return ModuleStatus.FAILED if total < PASS_MIN else ModuleStatus.COMPLETED


def is_valid_component(marks: float) -> bool:
    return 0 <= marks <= MAX_COMPONENT_MARKS
