"""REST API v1 viewsets and workflow endpoints."""
from __future__ import annotations

from django.db.models import OuterRef, Subquery
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.response import Response

from courses.models import Branch, Course, Department, Intake, Level, Module
from enrollments.models import Enrollment, ModuleStatus, StudentModule
from enrollments.exceptions import ValidationError
from enrollments.utils import as_id, enroll_student, ensure_can_enroll
from performance import reports
from performance.models import Performance
from performance.utils import record_marks, retract_marks
from students.models import Student
from .filters import PerformanceFilter
from .serializers import (
    BranchSerializer,
    CourseSerializer,
    DepartmentSerializer,
    EligibilityRequestSerializer,
    EnrollmentRequestSerializer,
    EnrollmentSerializer,
    IntakeSerializer,
    LevelSerializer,
    MarksOutcomeSerializer,
    MarksRequestSerializer,
    ModuleSerializer,
    PerformanceSerializer,
    StudentModuleSerializer,
    StudentSerializer,
)


def _optional_id(params, name: str):
    value = params.get(name)
    if value in (None, ""):
        return None
    pk = as_id(value)
    if pk is None:
        raise ValidationError(f"{name} must be an integer id")
    return pk


class DepartmentViewSet(viewsets.ModelViewSet):
    queryset = Department.objects.all()
    serializer_class = DepartmentSerializer
    search_fields = ["name"]


class BranchViewSet(viewsets.ModelViewSet):
    queryset = Branch.objects.all()
    serializer_class = BranchSerializer
    search_fields = ["name", "location"]


class IntakeViewSet(viewsets.ModelViewSet):
    queryset = Intake.objects.all()
    serializer_class = IntakeSerializer
    filterset_fields = ["year"]


class LevelViewSet(viewsets.ModelViewSet):
    queryset = Level.objects.all()
    serializer_class = LevelSerializer
    ordering_fields = ["level_order", "name"]


class CourseViewSet(viewsets.ModelViewSet):
    queryset = Course.objects.select_related("department").all()
    serializer_class = CourseSerializer
    filterset_fields = ["department"]
    search_fields = ["name", "code", "description"]
    ordering_fields = ["name", "created_at"]


class ModuleViewSet(viewsets.ModelViewSet):
    queryset = Module.objects.select_related("course", "level").all()
    serializer_class = ModuleSerializer
    filterset_fields = ["course", "level"]
    search_fields = ["code", "title"]
    ordering_fields = ["title", "code"]


class StudentViewSet(viewsets.ModelViewSet):
    queryset = Student.objects.select_related("department", "branch").all()
    serializer_class = StudentSerializer
    filterset_fields = ["status", "department", "branch"]
    search_fields = ["first_name", "last_name", "email"]
    ordering_fields = ["first_name", "last_name", "admission_date"]

    @action(detail=True, methods=["get"])
    def modules(self, request, pk=None):
        """Registered modules with marks, for the marks-entry dropdown."""
        student = self.get_object()
        course_id = _optional_id(request.query_params, "course_id")
        return Response(reports.enrolled_modules(student, course_id))

    @action(detail=True, methods=["get"])
    def progress(self, request, pk=None):
        student = self.get_object()
        return Response(reports.progress_summary(student))


class EnrollmentViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin, viewsets.GenericViewSet):
    queryset = Enrollment.objects.select_related("student", "course").all()
    serializer_class = EnrollmentSerializer
    filterset_fields = ["student", "course", "status", "intake", "branch"]
    ordering_fields = ["enrollment_date", "id"]

    @extend_schema(request=EnrollmentRequestSerializer, responses={201: None})
    def create(self, request, *args, **kwargs):
        data = request.data
        enrollment = enroll_student(
            data.get("student_id"),
            data.get("course_id"),
            data.get("level_id"),
            data.get("intake_id"),
            data.get("branch_id"),
            data.get("module_ids"),
        )
        return Response(
            {"message": "Enrollment created successfully", "enrollmentId": enrollment.pk},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=EligibilityRequestSerializer, responses={200: None})
    @action(detail=False, methods=["post"])
    def check(self, request):
        """Run the enrollment guard without enrolling."""
        existing = ensure_can_enroll(request.data.get("student_id"), request.data.get("course_id"))
        return Response({"eligible": True, "existingEnrollmentId": existing})


class StudentModuleViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = StudentModule.objects.select_related("module", "level").all()
    serializer_class = StudentModuleSerializer
    filterset_fields = ["student", "course", "level", "status"]
    ordering_fields = ["enrollment_date", "id"]


class MarksListCreateView(generics.ListCreateAPIView):
    """List recorded marks or record marks for one student module."""

    serializer_class = PerformanceSerializer
    filterset_class = PerformanceFilter
    search_fields = ["student__first_name", "student__last_name", "module__title", "module__code"]
    ordering_fields = ["id", "grade"]

    def get_queryset(self):
        status_sq = StudentModule.objects.filter(
            student_id=OuterRef("student_id"), module_id=OuterRef("module_id")
        ).values("status")[:1]
        return (
            Performance.objects.select_related("student", "module__level", "module__course")
            .annotate(enrollment_status=Subquery(status_sq))
            .order_by("-id")
        )

    @extend_schema(request=MarksRequestSerializer, responses={201: MarksOutcomeSerializer})
    def create(self, request, *args, **kwargs):
        data = request.data
        outcome = record_marks(
            data.get("student_id"),
            data.get("module_id"),
            data.get("theory_marks"),
            data.get("practical_marks"),
        )
        return Response({"message": "Marks added or updated successfully", **outcome}, status=status.HTTP_201_CREATED)


@extend_schema(request=None, responses={200: None})
@api_view(["DELETE"])
def marks_retract(request, student_id: int, module_id: int):
    """Delete marks for a student module and reset it to Enrolled."""
    details = retract_marks(student_id, module_id)
    return Response({"message": "Record deleted successfully", "details": details})


@extend_schema(responses={200: None})
@api_view(["GET"])
def marks_students(request):
    """Students with active enrollments and registered modules."""
    return Response(reports.students_for_marks_entry())


@extend_schema(responses={200: StudentModuleSerializer(many=True)})
@api_view(["GET"])
def student_modules_for_course(request, student_id: int, course_id: int, level_id: int | None = None):
    """Modules a student is still taking (status Enrolled) in a course."""
    student = get_object_or_404(Student, pk=student_id)
    qs = (
        StudentModule.objects.filter(student=student, course_id=course_id, status=ModuleStatus.ENROLLED)
        .select_related("module", "level")
        .order_by("level_id", "module_id")
    )
    if level_id is not None:
        qs = qs.filter(level_id=level_id)
    return Response(StudentModuleSerializer(qs, many=True).data)
