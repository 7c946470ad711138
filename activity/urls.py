from django.urls import path
from .views import activity_recent

app_name = "activity"

urlpatterns = [
    path("recent/", activity_recent, name="recent"),
]
