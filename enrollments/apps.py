from django.apps import AppConfig


class EnrollmentsConfig(AppConfig):
    """App configuration for course enrollments and module registrations."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "enrollments"
