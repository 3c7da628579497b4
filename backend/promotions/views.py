# promotions/views.py
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from drf_spectacular.utils import extend_schema
import logging

from activity.tasks import log_activity
from catalog.models import Room, Service
from config.constants import PROMOTION_SCOPE_CHOICES
from users.permissions import IsDashboardUser
from utils.discounts import compute_discounted_price, compute_discount_amount, format_promotion_label
from utils.promotions import (
    PromotionError,
    get_active_promotions,
    get_promotion_stats,
    redeem_promotion,
    verify_code,
)
from .models import Promotion
from .serializers import PromotionSerializer, PublicPromotionSerializer, VerifyCodeSerializer, QuoteSerializer
from .schemas import (
    active_promotions_schema,
    verify_code_schema,
    quote_schema,
    redeem_schema,
    stats_schema,
    targets_schema,
    destroy_schema,
)

logger = logging.getLogger(__name__)

PUBLIC_ACTIONS = ("active", "verify", "quote")
SCOPE_KEYS = {choice["key"] for choice in PROMOTION_SCOPE_CHOICES}

ERROR_STATUS = {
    PromotionError.CODE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    PromotionError.CODE_EXPIRED_OR_INACTIVE: status.HTTP_400_BAD_REQUEST,
    PromotionError.CODE_EXHAUSTED: status.HTTP_400_BAD_REQUEST,
    PromotionError.USAGE_LIMIT_REACHED: status.HTTP_409_CONFLICT,
    PromotionError.PROMOTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def error_response(error):
    return Response({"error": error.message, "code": error.value}, status=ERROR_STATUS[error])


class PromotionViewSet(viewsets.ModelViewSet):
    """
    Admin CRUD over promotions plus the public engine endpoints
    (active listing, code verification, price quote).
    """
    serializer_class = PromotionSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsDashboardUser()]

    def get_queryset(self):
        queryset = Promotion.objects.select_related("target_room", "target_service")
        params = self.request.query_params

        is_active = params.get("is_active")
        if is_active in ("true", "false"):
            queryset = queryset.filter(is_active=is_active == "true")
        if params.get("scope"):
            queryset = queryset.filter(scope=params["scope"])
        if params.get("discount_type"):
            queryset = queryset.filter(discount_type=params["discount_type"])
        if params.get("active_only") == "true":
            queryset = queryset.eligible()

        return queryset

    def save_promotion(self, serializer):
        """Save, reporting a code taken by a concurrent write as a duplicate rather than a 500"""
        try:
            with transaction.atomic():
                return serializer.save()
        except IntegrityError:
            code = serializer.validated_data.get("code")
            taken = Promotion.objects.filter(code=code)
            if serializer.instance is not None:
                taken = taken.exclude(pk=serializer.instance.pk)
            if code is not None and taken.exists():
                logger.info(f"Promo code {code} taken by a concurrent write")
                raise ValidationError({"code": ["This promo code already exists."]}, code="duplicate_code")
            raise

    def perform_create(self, serializer):
        promotion = self.save_promotion(serializer)
        log_activity(self.request.user, "CREATE", "Promotion", promotion.pk, f"Promotion created: {promotion.name}")

    def perform_update(self, serializer):
        promotion = self.save_promotion(serializer)
        log_activity(self.request.user, "UPDATE", "Promotion", promotion.pk, f"Promotion updated: {promotion.name}")

    @extend_schema(**destroy_schema)
    def destroy(self, request, pk=None):
        """Delete a promotion unless announcements still display it"""
        promotion = self.get_object()

        bound = promotion.announcements.count()
        if bound:
            return Response({
                "error": f"This promotion is linked to {bound} announcement(s). Delete or unlink them first.",
                "code": "dependent_announcements_exist",
                "announcement_count": bound,
            }, status=status.HTTP_409_CONFLICT)

        promotion_id, name = promotion.pk, promotion.name
        try:
            promotion.delete()
        except ProtectedError:
            # An announcement was bound between the check and the delete
            logger.warning(f"Delete of promotion {promotion_id} blocked by a newly bound announcement")
            return Response({
                "error": "This promotion is linked to announcements. Delete or unlink them first.",
                "code": "dependent_announcements_exist",
            }, status=status.HTTP_409_CONFLICT)

        log_activity(request.user, "DELETE", "Promotion", promotion_id, f"Promotion deleted: {name}")
        return Response({"message": "Promotion deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        """Flip the manual active switch"""
        promotion = self.get_object()
        promotion.is_active = not promotion.is_active
        promotion.save(update_fields=["is_active", "updated_at"])

        state = "activated" if promotion.is_active else "deactivated"
        log_activity(request.user, "TOGGLE", "Promotion", promotion.pk, f"Promotion {state}: {promotion.name}")
        return Response(self.get_serializer(promotion).data)

    @extend_schema(**redeem_schema)
    @action(detail=True, methods=['post'])
    def redeem(self, request, pk=None):
        """Count one redemption, called by the booking flow once per confirmed booking"""
        new_count, error = redeem_promotion(pk)
        if error:
            return error_response(error)

        log_activity(request.user, "REDEEM", "Promotion", pk, f"Promotion redeemed ({new_count})")
        return Response({"promotion_id": int(pk), "redemption_count": new_count})

    @extend_schema(**stats_schema)
    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(get_promotion_stats())

    @extend_schema(**targets_schema)
    @action(detail=False, methods=['get'])
    def targets(self, request):
        """Rooms and services a promotion can be restricted to"""
        rooms = Room.objects.filter(is_active=True).order_by("name").values("id", "name", "slug")
        services = Service.objects.filter(is_active=True).order_by("name").values("id", "name", "slug", "service_type")
        return Response({"rooms": list(rooms), "services": list(services)})

    @extend_schema(**active_promotions_schema)
    @action(detail=False, methods=['get'])
    def active(self, request):
        """Promotions currently running, for the public site"""
        scope = request.query_params.get("scope") or None
        if scope and scope not in SCOPE_KEYS:
            return Response({"error": f"Unknown scope: {scope}"}, status=status.HTTP_400_BAD_REQUEST)

        promotions = get_active_promotions(scope=scope)
        return Response(PublicPromotionSerializer(promotions, many=True).data)

    @extend_schema(**verify_code_schema)
    @action(detail=False, methods=['post'])
    def verify(self, request):
        """Check a promo code entered by a visitor"""
        serializer = VerifyCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        promotion, error = verify_code(
            serializer.validated_data["code"],
            scope=serializer.validated_data.get("scope"),
        )
        if error:
            logger.info(f"Promo code rejected ({error.value})")
            return error_response(error)

        return Response(PublicPromotionSerializer(promotion).data)

    @extend_schema(**quote_schema)
    @action(detail=True, methods=['post'])
    def quote(self, request, pk=None):
        """Discounted price of an item under a running promotion"""
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        base_price = serializer.validated_data["base_price"]

        promotion = Promotion.objects.eligible().filter(pk=pk).first()
        if promotion is None:
            return error_response(PromotionError.PROMOTION_NOT_FOUND)

        discounted_price = compute_discounted_price(base_price, promotion)
        return Response({
            "promotion_id": promotion.pk,
            "label": format_promotion_label(promotion),
            "base_price": base_price,
            "applicable": discounted_price is not None,
            "discounted_price": discounted_price,
            "discount_amount": compute_discount_amount(base_price, promotion),
        })
