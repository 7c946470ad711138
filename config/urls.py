"""URL routing for the vocational college backend.

Admin, the activity feed and the versioned REST API with its schema and
documentation routes.
"""
from django.contrib import admin
from django.urls import include, path


urlpatterns = [
    path("admin/", admin.site.urls),
    path("activity/", include("activity.urls")),
    # API schema, docs and /api/v1/ endpoints
    path("", include("api.urls")),
]
