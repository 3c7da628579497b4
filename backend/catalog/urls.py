from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import RoomViewSet, ServiceViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'services', ServiceViewSet, basename='service')

urlpatterns = [
    path('', include(router.urls)),
]
