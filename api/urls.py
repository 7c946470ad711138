"""API routes.

OpenAPI schema and interactive documentation, the catalog/student CRUD
viewsets and the enrollment and marks workflow endpoints under /api/v1/.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)


from .views import (
    BranchViewSet,
    CourseViewSet,
    DepartmentViewSet,
    EnrollmentViewSet,
    IntakeViewSet,
    LevelViewSet,
    MarksListCreateView,
    ModuleViewSet,
    StudentModuleViewSet,
    StudentViewSet,
    marks_retract,
    marks_students,
    student_modules_for_course,
)

router = DefaultRouter()
router.register(r"api/v1/departments", DepartmentViewSet, basename="departments")
router.register(r"api/v1/branches", BranchViewSet, basename="branches")
router.register(r"api/v1/intakes", IntakeViewSet, basename="intakes")
router.register(r"api/v1/levels", LevelViewSet, basename="levels")
router.register(r"api/v1/courses", CourseViewSet, basename="courses")
router.register(r"api/v1/modules", ModuleViewSet, basename="modules")
router.register(r"api/v1/students", StudentViewSet, basename="students")
router.register(r"api/v1/enrollments", EnrollmentViewSet, basename="enrollments")
router.register(r"api/v1/student-modules", StudentModuleViewSet, basename="student-modules")

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("api/v1/marks/", MarksListCreateView.as_view(), name="marks"),
    path("api/v1/marks/students/", marks_students, name="marks-students"),
    path("api/v1/marks/<int:student_id>/<int:module_id>/", marks_retract, name="marks-retract"),
    path(
        "api/v1/student-modules/<int:student_id>/<int:course_id>/",
        student_modules_for_course,
        name="student-modules",
    ),
    path(
        "api/v1/student-modules/<int:student_id>/<int:course_id>/<int:level_id>/",
        student_modules_for_course,
        name="student-modules-level",
    ),
    path("", include(router.urls)),
]
