"""DRF exception handler that renders workflow errors as `{"error": ...}`."""
from __future__ import annotations

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from enrollments.exceptions import WorkflowError


def exception_handler(exc, context):
    # Storage failures are already logged where they are raised
    if isinstance(exc, WorkflowError):
        return Response({"error": exc.message}, status=exc.status_code)
    return drf_exception_handler(exc, context)
