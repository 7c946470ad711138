from django.contrib import admin

from .models import Performance


@admin.register(Performance)
class PerformanceAdmin(admin.ModelAdmin):
    list_display = ("student", "module", "theory_marks", "practical_marks", "grade", "updated_at")
    list_filter = ("grade", "module__course")
    search_fields = ("student__first_name", "student__last_name", "module__title", "module__code")
