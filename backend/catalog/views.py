# catalog/views.py
from rest_framework import viewsets
from rest_framework.permissions import AllowAny
import logging

from activity.tasks import log_activity
from users.permissions import IsDashboardUser
from .models import Room, Service
from .serializers import RoomSerializer, ServiceSerializer

logger = logging.getLogger(__name__)


class CatalogViewSet(viewsets.ModelViewSet):
    """
    Shared behaviour for rooms and services:
    the public site may read active rows, the dashboard manages everything.
    """
    entity_type = None

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        return [IsDashboardUser()]

    def get_queryset(self):
        queryset = self.queryset.all()
        user = self.request.user
        if not (user.is_authenticated and user.can_access_dashboard()):
            queryset = queryset.filter(is_active=True)
        return queryset

    def perform_create(self, serializer):
        instance = serializer.save()
        log_activity(self.request.user, "CREATE", self.entity_type, instance.pk, f"{self.entity_type} created: {instance.name}")

    def perform_update(self, serializer):
        instance = serializer.save()
        log_activity(self.request.user, "UPDATE", self.entity_type, instance.pk, f"{self.entity_type} updated: {instance.name}")

    def perform_destroy(self, instance):
        pk, name = instance.pk, instance.name
        instance.delete()
        log_activity(self.request.user, "DELETE", self.entity_type, pk, f"{self.entity_type} deleted: {name}")


class RoomViewSet(CatalogViewSet):
    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    lookup_field = "slug"
    entity_type = "Room"


class ServiceViewSet(CatalogViewSet):
    queryset = Service.objects.all()
    serializer_class = ServiceSerializer
    lookup_field = "slug"
    entity_type = "Service"
