# announcements/schemas.py
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from rest_framework import serializers

from .serializers import AnnouncementSerializer

active_announcements_schema = {
    'operation_id': 'ActiveAnnouncements',
    'description': """
    Announcements running right now, pinned ones first, then by `order`.
    Each carries a summary of its promotion (with the badge `label`) when one is bound.
    """,
    'parameters': [
        OpenApiParameter("position", str, required=False, description="Only announcements shown at exactly this position"),
    ],
    'responses': {
        200: AnnouncementSerializer(many=True),
        400: OpenApiResponse(description="Unknown position"),
    },
}

announcement_stats_schema = {
    'operation_id': 'AnnouncementStats',
    'responses': {
        200: inline_serializer(
            name="AnnouncementStatsResponse",
            fields={
                "total": serializers.IntegerField(),
                "active": serializers.IntegerField(),
                "expired": serializers.IntegerField(),
                "pinned": serializers.IntegerField(),
                "by_position": serializers.DictField(child=serializers.IntegerField()),
            },
        ),
    },
}

duplicate_announcement_schema = {
    'operation_id': 'DuplicateAnnouncement',
    'description': """
    Copy an announcement. The copy is switched off and its title ends with " (copy)";
    every other field, the bound promotion included, is kept.
    """,
    'request': None,
    'responses': {
        201: AnnouncementSerializer,
    },
}
