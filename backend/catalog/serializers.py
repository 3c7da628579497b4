# catalog/serializers.py
from rest_framework import serializers
from .models import Room, Service


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "name", "slug", "room_type", "price", "capacity", "is_active"]
        read_only_fields = ["id", "slug"]

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name is required.")
        return value.strip()


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "name", "slug", "service_type", "price", "is_active"]
        read_only_fields = ["id", "slug"]

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name is required.")
        return value.strip()
