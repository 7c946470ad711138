"""Serializers for REST API v1.

Catalog and student serializers are plain model serializers. The workflow
request serializers only describe payloads for the schema; validation of
those payloads happens in the workflow functions so every rule produces
its own error message.
"""
from __future__ import annotations

from rest_framework import serializers
from rest_framework.validators import UniqueTogetherValidator

from courses.models import Branch, Course, Department, Intake, Level, Module
from enrollments.models import Enrollment, StudentModule
from performance.models import Performance
from students.models import Student


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ("id", "name", "created_at")
        read_only_fields = ("created_at",)


class BranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = ("id", "name", "location")


class IntakeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Intake
        fields = ("id", "intake_name", "year", "term", "start_date", "end_date")


class LevelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Level
        fields = ("id", "name", "level_order", "duration", "description")


class CourseSerializer(serializers.ModelSerializer):
    department_name = serializers.CharField(source="department.name", read_only=True, default=None)

    class Meta:
        model = Course
        fields = ("id", "name", "code", "description", "department", "department_name", "created_at", "updated_at")
        read_only_fields = ("created_at", "updated_at")


class ModuleSerializer(serializers.ModelSerializer):
    course_name = serializers.CharField(source="course.name", read_only=True)
    level_name = serializers.CharField(source="level.name", read_only=True)

    class Meta:
        model = Module
        fields = ("id", "code", "title", "course", "course_name", "level", "level_name")
        validators = [
            UniqueTogetherValidator(queryset=Module.objects.all(), fields=("course", "code"), message="Module code already exists in this course."),
        ]


class StudentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = (
            "id",
            "first_name",
            "last_name",
            "email",
            "phone",
            "status",
            "department",
            "branch",
            "admission_date",
            "created_at",
        )
        read_only_fields = ("created_at",)


class EnrollmentSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source="student.full_name", read_only=True)
    course_name = serializers.CharField(source="course.name", read_only=True)

    class Meta:
        model = Enrollment
        fields = (
            "id",
            "student",
            "student_name",
            "course",
            "course_name",
            "intake",
            "branch",
            "enrollment_date",
            "status",
        )
        read_only_fields = fields


class StudentModuleSerializer(serializers.ModelSerializer):
    title = serializers.CharField(source="module.title", read_only=True)
    level_name = serializers.CharField(source="level.name", read_only=True)

    class Meta:
        model = StudentModule
        fields = (
            "id",
            "student",
            "course",
            "level",
            "module_id",
            "title",
            "level_name",
            "status",
            "enrollment_date",
            "completion_date",
        )
        read_only_fields = fields


class PerformanceSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    module_id = serializers.IntegerField(read_only=True)
    total = serializers.FloatField(read_only=True)
    first_name = serializers.CharField(source="student.first_name", read_only=True)
    last_name = serializers.CharField(source="student.last_name", read_only=True)
    department_id = serializers.IntegerField(source="student.department_id", read_only=True)
    module_title = serializers.CharField(source="module.title", read_only=True)
    module_code = serializers.CharField(source="module.code", read_only=True)
    level_name = serializers.CharField(source="module.level.name", read_only=True)
    course_name = serializers.CharField(source="module.course.name", read_only=True)
    enrollment_status = serializers.CharField(read_only=True, default=None)

    class Meta:
        model = Performance
        fields = (
            "id",
            "student_id",
            "module_id",
            "theory_marks",
            "practical_marks",
            "total",
            "grade",
            "first_name",
            "last_name",
            "department_id",
            "module_title",
            "module_code",
            "level_name",
            "course_name",
            "enrollment_status",
        )
        read_only_fields = fields


class EnrollmentRequestSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    course_id = serializers.IntegerField()
    level_id = serializers.IntegerField()
    intake_id = serializers.IntegerField()
    branch_id = serializers.IntegerField()
    module_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class EligibilityRequestSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    course_id = serializers.IntegerField()


class MarksRequestSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    module_id = serializers.IntegerField()
    theory_marks = serializers.FloatField(min_value=0, max_value=50)
    practical_marks = serializers.FloatField(min_value=0, max_value=50)


class MarksOutcomeSerializer(MarksRequestSerializer):
    message = serializers.CharField()
    total = serializers.FloatField()
    grade = serializers.CharField()
    module_title = serializers.CharField()
    new_status = serializers.CharField()
