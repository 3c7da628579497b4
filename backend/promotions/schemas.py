# promotions/schemas.py
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, inline_serializer
from rest_framework import serializers

from .serializers import PublicPromotionSerializer, VerifyCodeSerializer, QuoteSerializer

ErrorResponse = inline_serializer(
    name="PromotionErrorResponse",
    fields={
        "error": serializers.CharField(),
        "code": serializers.CharField(),
    },
)

active_promotions_schema = {
    'operation_id': 'ActivePromotions',
    'description': """
    List promotions running right now.

    A promotion is listed when it is switched on, `starts_at <= now <= ends_at`,
    and its redemption cap (if any) is not reached. Results are ordered by raw
    `value`, largest first, regardless of the discount type.
    """,
    'parameters': [
        OpenApiParameter("scope", str, required=False, description="Only promotions with exactly this scope"),
    ],
    'responses': {
        200: PublicPromotionSerializer(many=True),
        400: OpenApiResponse(description="Unknown scope"),
    },
}

verify_code_schema = {
    'operation_id': 'VerifyPromoCode',
    'description': """
    Verify a promo code typed by a visitor.

    Codes are case-insensitive. When `scope` is sent, the promotion must be scoped
    to `ALL` or to that scope.
    """,
    'request': VerifyCodeSerializer,
    'responses': {
        200: PublicPromotionSerializer,
        400: OpenApiResponse(response=ErrorResponse, description="Code expired, inactive, out of scope or exhausted"),
        404: OpenApiResponse(response=ErrorResponse, description="No promotion has this code"),
    },
    'examples': [
        OpenApiExample(
            'Room booking',
            value={"code": "summer20", "scope": "ROOM"},
            request_only=True,
        ),
    ],
}

quote_schema = {
    'operation_id': 'QuotePromotion',
    'description': """
    Compute the discounted price of an item under a running promotion.

    `applicable` is false (and `discounted_price` null) when a fixed amount would
    make the price zero or negative, or when the base price is under the
    promotion's minimum amount.
    """,
    'request': QuoteSerializer,
    'responses': {
        200: inline_serializer(
            name="PromotionQuote",
            fields={
                "promotion_id": serializers.IntegerField(),
                "label": serializers.CharField(),
                "base_price": serializers.DecimalField(max_digits=12, decimal_places=2),
                "applicable": serializers.BooleanField(),
                "discounted_price": serializers.IntegerField(allow_null=True),
                "discount_amount": serializers.IntegerField(allow_null=True),
            },
        ),
        404: OpenApiResponse(response=ErrorResponse, description="Promotion missing or not running"),
    },
}

redeem_schema = {
    'operation_id': 'RedeemPromotion',
    'description': """
    Record one redemption of a promotion. Called once per confirmed booking that used it.

    The cap check and the increment happen in one conditional update, so concurrent
    calls can never push `redemption_count` past `max_redemptions`.
    """,
    'request': None,
    'responses': {
        200: inline_serializer(
            name="RedemptionSuccess",
            fields={
                "promotion_id": serializers.IntegerField(),
                "redemption_count": serializers.IntegerField(),
            },
        ),
        404: OpenApiResponse(response=ErrorResponse, description="Promotion not found"),
        409: OpenApiResponse(response=ErrorResponse, description="Usage limit reached"),
    },
}

stats_schema = {
    'operation_id': 'PromotionStats',
    'responses': {
        200: inline_serializer(
            name="PromotionStats",
            fields={
                "total": serializers.IntegerField(),
                "active": serializers.IntegerField(),
                "expired": serializers.IntegerField(),
                "with_code": serializers.IntegerField(),
                "by_scope": serializers.DictField(child=serializers.IntegerField()),
            },
        ),
    },
}

targets_schema = {
    'operation_id': 'PromotionTargets',
    'description': "Active rooms and services a promotion can be restricted to.",
    'responses': {
        200: inline_serializer(
            name="PromotionTargets",
            fields={
                "rooms": serializers.ListField(child=serializers.DictField()),
                "services": serializers.ListField(child=serializers.DictField()),
            },
        ),
    },
}

destroy_schema = {
    'operation_id': 'DeletePromotion',
    'description': "Delete a promotion. Refused while announcements are bound to it.",
    'responses': {
        200: inline_serializer(
            name="PromotionDeleted",
            fields={"message": serializers.CharField(default="Promotion deleted successfully")},
        ),
        409: OpenApiResponse(description="Announcements still reference this promotion"),
    },
}
