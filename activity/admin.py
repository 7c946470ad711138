from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("student", "type", "action", "course", "created_at")
    list_filter = ("type",)
    search_fields = ("action", "course", "student__first_name", "student__last_name")

    def has_change_permission(self, request, obj=None):  # append-only log
        return False
