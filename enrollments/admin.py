from django.contrib import admin

from .models import Enrollment, StudentModule


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "intake", "branch", "status", "enrollment_date")
    list_filter = ("status", "course", "intake", "branch")
    search_fields = ("student__first_name", "student__last_name", "course__name")


@admin.register(StudentModule)
class StudentModuleAdmin(admin.ModelAdmin):
    list_display = ("student", "module", "course", "level", "status", "enrollment_date", "completion_date")
    list_filter = ("status", "course", "level")
    search_fields = ("student__first_name", "student__last_name", "module__title", "module__code")
