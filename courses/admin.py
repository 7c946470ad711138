from django.contrib import admin

from .models import Branch, Course, Department, Intake, Level, Module


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "location")
    search_fields = ("name", "location")


@admin.register(Intake)
class IntakeAdmin(admin.ModelAdmin):
    list_display = ("intake_name", "year", "term", "start_date", "end_date")
    list_filter = ("year",)


@admin.register(Level)
class LevelAdmin(admin.ModelAdmin):
    list_display = ("name", "level_order", "duration")


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "department", "created_at")
    list_filter = ("department",)
    search_fields = ("name", "code", "description")


@admin.register(Module)
class ModuleAdmin(admin.ModelAdmin):
    list_display = ("code", "title", "course", "level")
    list_filter = ("course", "level")
    search_fields = ("code", "title", "course__name")
