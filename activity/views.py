from __future__ import annotations

from datetime import timedelta

from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .models import Activity


@require_GET
def activity_recent(request: HttpRequest) -> JsonResponse:
    """Return the latest activity entries from the last 30 days.

    Optional `student` narrows the feed to one student; `limit` defaults to 5
    and is capped at 100.
    """
    try:
        limit = int(request.GET.get("limit", 5))
    except (TypeError, ValueError):
        limit = 5
    limit = max(1, min(limit, 100))
    since = timezone.now() - timedelta(days=30)
    qs = Activity.objects.filter(created_at__gte=since).select_related("student").order_by("-created_at", "-id")
    student_id = request.GET.get("student")
    if student_id:
        try:
            qs = qs.filter(student_id=int(student_id))
        except ValueError:
            return JsonResponse({"error": "student must be an integer id"}, status=400)
    data = [
        {
            "id": a.id,
            "student": a.student.full_name,
            "action": a.action,
            "course": a.course,
            "time": a.created_at.isoformat(),
            "type": a.type,
        }
        for a in qs[:limit]
    ]
    return JsonResponse({"results": data})
