# announcements/views.py
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status, viewsets
from rest_framework.decorators import action
from django.db.models import Count
from django.utils import timezone
from drf_spectacular.utils import extend_schema
import logging

from activity.tasks import log_activity
from config.constants import ANNOUNCEMENT_POSITION_CHOICES
from users.permissions import IsDashboardUser
from .models import Announcement
from .serializers import AnnouncementSerializer
from .schemas import active_announcements_schema, announcement_stats_schema, duplicate_announcement_schema

logger = logging.getLogger(__name__)

POSITION_KEYS = {choice["key"] for choice in ANNOUNCEMENT_POSITION_CHOICES}
COPY_SUFFIX = " (copy)"


class AnnouncementViewSet(viewsets.ModelViewSet):
    """Admin CRUD over announcements; `active` serves the public banners."""
    serializer_class = AnnouncementSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "active":
            return [AllowAny()]
        return [IsDashboardUser()]

    def get_queryset(self):
        queryset = Announcement.objects.select_related("promotion")
        position = self.request.query_params.get("position")
        if position:
            queryset = queryset.filter(position=position)
        return queryset

    def perform_create(self, serializer):
        announcement = serializer.save()
        log_activity(self.request.user, "CREATE", "Announcement", announcement.pk, f"Announcement created: {announcement.title}")

    def perform_update(self, serializer):
        announcement = serializer.save()
        log_activity(self.request.user, "UPDATE", "Announcement", announcement.pk, f"Announcement updated: {announcement.title}")

    def perform_destroy(self, instance):
        announcement_id, title = instance.pk, instance.title
        instance.delete()
        log_activity(self.request.user, "DELETE", "Announcement", announcement_id, f"Announcement deleted: {title}")

    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        announcement = self.get_object()
        announcement.is_active = not announcement.is_active
        announcement.save(update_fields=["is_active"])

        state = "activated" if announcement.is_active else "deactivated"
        log_activity(request.user, "TOGGLE", "Announcement", announcement.pk, f"Announcement {state}: {announcement.title}")
        return Response(self.get_serializer(announcement).data)

    @action(detail=True, methods=['post'], url_path='toggle-pinned')
    def toggle_pinned(self, request, pk=None):
        """Pin to the top of the public listing, or unpin"""
        announcement = self.get_object()
        announcement.is_pinned = not announcement.is_pinned
        announcement.save(update_fields=["is_pinned"])

        state = "pinned" if announcement.is_pinned else "unpinned"
        log_activity(request.user, "TOGGLE", "Announcement", announcement.pk, f"Announcement {state}: {announcement.title}")
        return Response(self.get_serializer(announcement).data)

    @extend_schema(**duplicate_announcement_schema)
    @action(detail=True, methods=['post'])
    def duplicate(self, request, pk=None):
        """Copy an announcement as an inactive draft"""
        source = self.get_object()

        copy = Announcement.objects.get(pk=source.pk)
        copy.pk = None
        copy._state.adding = True
        copy.title = f"{source.title[:Announcement._meta.get_field('title').max_length - len(COPY_SUFFIX)]}{COPY_SUFFIX}"
        copy.is_active = False
        copy.save()

        log_activity(request.user, "CREATE", "Announcement", copy.pk, f"Announcement duplicated: {copy.title}", {"source_id": source.pk})
        return Response(self.get_serializer(copy).data, status=status.HTTP_201_CREATED)

    @extend_schema(**announcement_stats_schema)
    @action(detail=False, methods=['get'])
    def stats(self, request):
        now = timezone.now()
        announcements = Announcement.objects.all()

        by_position = {}
        for row in announcements.order_by().values("position").annotate(count=Count("id")):
            by_position[row["position"]] = row["count"]

        return Response({
            "total": announcements.count(),
            "active": announcements.running(now).count(),
            "expired": announcements.filter(ends_at__lt=now).count(),
            "pinned": announcements.filter(is_pinned=True).count(),
            "by_position": by_position,
        })

    @extend_schema(**active_announcements_schema)
    @action(detail=False, methods=['get'])
    def active(self, request):
        """Announcements running now, with their promotion badge when bound"""
        position = request.query_params.get("position")
        if position and position not in POSITION_KEYS:
            return Response({"error": f"Unknown position: {position}"}, status=status.HTTP_400_BAD_REQUEST)

        announcements = Announcement.objects.running().select_related("promotion")
        if position:
            announcements = announcements.filter(position=position)

        serializer = self.get_serializer(announcements.order_by("-is_pinned", "order"), many=True)
        return Response(serializer.data)
