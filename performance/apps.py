from django.apps import AppConfig


class PerformanceConfig(AppConfig):
    """App configuration for marks entry and grading."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "performance"
