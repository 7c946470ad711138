from __future__ import annotations

import django_filters

from performance.models import Performance


class PerformanceFilter(django_filters.FilterSet):
    """Marks list filters named after the request fields used for entry."""

    student_id = django_filters.NumberFilter(field_name="student_id")
    module_id = django_filters.NumberFilter(field_name="module_id")
    course_id = django_filters.NumberFilter(field_name="module__course_id")

    class Meta:
        model = Performance
        fields = ["student_id", "module_id", "course_id", "grade"]
