# activity/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter

from users.permissions import IsDashboardUser
from .models import ActivityLog
from .serializers import ActivityLogSerializer

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


class ActivityLogListView(APIView):
    """
    Paginated activity log for the admin dashboard.
    Optional filters: user, entity_type, action. Paging with limit/offset.
    """
    permission_classes = [IsDashboardUser]

    @extend_schema(
        operation_id="ActivityLogList",
        parameters=[
            OpenApiParameter("user", int, required=False),
            OpenApiParameter("entity_type", str, required=False),
            OpenApiParameter("action", str, required=False),
            OpenApiParameter("limit", int, required=False),
            OpenApiParameter("offset", int, required=False),
        ],
    )
    def get(self, request):
        logs = ActivityLog.objects.all()

        try:
            user_id = int(request.query_params["user"]) if request.query_params.get("user") else None
            limit = min(int(request.query_params.get("limit", DEFAULT_LIMIT)), MAX_LIMIT)
            offset = max(int(request.query_params.get("offset", 0)), 0)
        except ValueError:
            return Response({"error": "user, limit and offset must be integers"}, status=status.HTTP_400_BAD_REQUEST)
        if limit < 1:
            return Response({"error": "limit must be at least 1"}, status=status.HTTP_400_BAD_REQUEST)

        entity_type = request.query_params.get("entity_type")
        action = request.query_params.get("action")
        if user_id is not None:
            logs = logs.filter(user_id=user_id)
        if entity_type:
            logs = logs.filter(entity_type=entity_type)
        if action:
            logs = logs.filter(action=action)

        total = logs.count()
        page = logs[offset:offset + limit]

        return Response({
            "total": total,
            "logs": ActivityLogSerializer(page, many=True).data,
        })


class ActivityFiltersView(APIView):
    """Distinct users and entity types present in the log, for filter dropdowns."""
    permission_classes = [IsDashboardUser]

    @extend_schema(operation_id="ActivityLogFilters")
    def get(self, request):
        users = (
            ActivityLog.objects.exclude(user__isnull=True)
            .values("user_id", "user_name", "user_email")
            .distinct()
            .order_by("user_email")
        )
        entity_types = (
            ActivityLog.objects.values_list("entity_type", flat=True)
            .distinct()
            .order_by("entity_type")
        )
        return Response({
            "users": list(users),
            "entity_types": list(entity_types),
        })
