from django.urls import path
from .views import ActivityLogListView, ActivityFiltersView

urlpatterns = [
    path("", ActivityLogListView.as_view(), name="activity-log-list"),
    path("filters/", ActivityFiltersView.as_view(), name="activity-log-filters"),
]
