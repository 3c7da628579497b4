# announcements/serializers.py
from rest_framework import serializers

from promotions.models import Promotion
from utils.discounts import format_promotion_label
from .models import Announcement


class BoundPromotionSerializer(serializers.ModelSerializer):
    """Summary of the promotion an announcement advertises."""
    label = serializers.SerializerMethodField()

    class Meta:
        model = Promotion
        fields = ["id", "name", "discount_type", "value", "code", "scope", "label"]

    def get_label(self, obj):
        return format_promotion_label(obj)


class AnnouncementSerializer(serializers.ModelSerializer):
    promotion_id = serializers.PrimaryKeyRelatedField(
        queryset=Promotion.objects.all(),
        source="promotion",
        required=False,
        allow_null=True,
    )
    promotion = BoundPromotionSerializer(read_only=True)

    class Meta:
        model = Announcement
        fields = [
            "id",
            "title",
            "description",
            "link",
            "button_text",
            "position",
            "starts_at",
            "ends_at",
            "order",
            "is_active",
            "is_pinned",
            "promotion_id",
            "promotion",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()

    def validate(self, data):
        starts_at = data.get("starts_at", getattr(self.instance, "starts_at", None))
        ends_at = data.get("ends_at", getattr(self.instance, "ends_at", None))
        if starts_at and ends_at and starts_at > ends_at:
            raise serializers.ValidationError({"ends_at": "End date must be after start date."})
        return data
