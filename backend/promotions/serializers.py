# promotions/serializers.py
from rest_framework import serializers
from django.utils import timezone

from catalog.models import Room, Service
from config.constants import PROMOTION_SCOPE_CHOICES, SERVICE_SCOPES, as_choices
from utils.discounts import format_promotion_label
from .models import Promotion, normalize_code


class PromotionSerializer(serializers.ModelSerializer):
    """Admin representation of a promotion, enforcing the write-time rules."""
    target_room_id = serializers.PrimaryKeyRelatedField(
        queryset=Room.objects.all(),
        source="target_room",
        required=False,
        allow_null=True,
    )
    target_service_id = serializers.PrimaryKeyRelatedField(
        queryset=Service.objects.all(),
        source="target_service",
        required=False,
        allow_null=True,
    )
    code = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    status = serializers.SerializerMethodField()
    label = serializers.SerializerMethodField()
    announcement_count = serializers.SerializerMethodField()

    class Meta:
        model = Promotion
        fields = [
            "id",
            "name",
            "description",
            "discount_type",
            "value",
            "scope",
            "target_room_id",
            "target_service_id",
            "code",
            "starts_at",
            "ends_at",
            "minimum_amount",
            "max_redemptions",
            "max_redemptions_per_customer",
            "redemption_count",
            "is_active",
            "terms",
            "status",
            "label",
            "announcement_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "redemption_count", "created_at", "updated_at"]

    def get_status(self, obj):
        return obj.get_status(timezone.now())

    def get_label(self, obj):
        return format_promotion_label(obj)

    def get_announcement_count(self, obj):
        return obj.announcements.count()

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name is required.")
        return value.strip()

    def validate_value(self, value):
        if value <= 0:
            raise serializers.ValidationError("Value must be positive.")
        return value

    def validate_minimum_amount(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Minimum amount must be positive.")
        return value

    def validate_max_redemptions(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Maximum redemptions must be positive.")
        return value

    def validate_max_redemptions_per_customer(self, value):
        if value <= 0:
            raise serializers.ValidationError("Redemptions per customer must be positive.")
        return value

    def validate_code(self, value):
        """Normalize to uppercase and refuse codes already used by another promotion."""
        code = normalize_code(value)
        if code is None:
            return None

        duplicates = Promotion.objects.filter(code=code)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError("This promo code already exists.", code="duplicate_code")
        return code

    def validate(self, data):
        def current(field):
            if field in data:
                return data[field]
            return getattr(self.instance, field, None)

        starts_at = current("starts_at")
        ends_at = current("ends_at")
        if starts_at and ends_at and starts_at > ends_at:
            raise serializers.ValidationError({"ends_at": "End date must be after start date."})

        scope = current("scope") or "ALL"
        target_room = current("target_room")
        target_service = current("target_service")

        if target_room is not None and target_service is not None:
            raise serializers.ValidationError({"target_room_id": "A promotion targets a room or a service, not both."})
        if target_room is not None and scope != "ROOM":
            raise serializers.ValidationError({"target_room_id": "A specific room can only be targeted with the ROOM scope."})
        if target_service is not None and scope not in SERVICE_SCOPES:
            raise serializers.ValidationError({"target_service_id": "A specific service can only be targeted with a service scope."})

        max_redemptions = current("max_redemptions")
        if self.instance is not None and max_redemptions is not None and max_redemptions < self.instance.redemption_count:
            raise serializers.ValidationError({
                "max_redemptions": f"Already redeemed {self.instance.redemption_count} times."
            })

        return data


class PublicPromotionSerializer(serializers.ModelSerializer):
    """What the public site needs to render a promotion badge."""
    label = serializers.SerializerMethodField()
    target_room = serializers.SerializerMethodField()
    target_service = serializers.SerializerMethodField()

    class Meta:
        model = Promotion
        fields = [
            "id",
            "name",
            "description",
            "discount_type",
            "value",
            "scope",
            "code",
            "label",
            "terms",
            "minimum_amount",
            "starts_at",
            "ends_at",
            "target_room",
            "target_service",
        ]

    def get_label(self, obj):
        return format_promotion_label(obj)

    def get_target_room(self, obj):
        if not obj.target_room:
            return None
        return {"id": obj.target_room.id, "name": obj.target_room.name, "slug": obj.target_room.slug}

    def get_target_service(self, obj):
        if not obj.target_service:
            return None
        return {"id": obj.target_service.id, "name": obj.target_service.name, "slug": obj.target_service.slug}


class VerifyCodeSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50, allow_blank=True)
    scope = serializers.ChoiceField(choices=as_choices(PROMOTION_SCOPE_CHOICES), required=False, allow_null=True)


class QuoteSerializer(serializers.Serializer):
    base_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
