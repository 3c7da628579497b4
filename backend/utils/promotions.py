from enum import Enum
from django.db import transaction
from django.db.models import Count, F, Q
from django.utils import timezone
from promotions.models import Promotion, normalize_code
import logging

logger = logging.getLogger(__name__)


class PromotionError(str, Enum):
    """Expected, user-facing outcomes of the promotion engine. Returned, never raised."""
    CODE_NOT_FOUND = "code_not_found"
    CODE_EXPIRED_OR_INACTIVE = "code_expired_or_inactive"
    CODE_EXHAUSTED = "code_exhausted"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    PROMOTION_NOT_FOUND = "promotion_not_found"

    @property
    def message(self):
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    PromotionError.CODE_NOT_FOUND: "This promo code does not exist.",
    PromotionError.CODE_EXPIRED_OR_INACTIVE: "This promo code is invalid or has expired.",
    PromotionError.CODE_EXHAUSTED: "This promo code has reached its usage limit.",
    PromotionError.USAGE_LIMIT_REACHED: "This promotion is no longer available.",
    PromotionError.PROMOTION_NOT_FOUND: "Promotion not found.",
}


def is_currently_eligible(promotion, now=None):
    """Active flag, inclusive [starts_at, ends_at] window, and remaining redemptions."""
    now = now or timezone.now()
    return (
        promotion.is_active
        and promotion.starts_at <= now <= promotion.ends_at
        and not promotion.is_exhausted
    )


def get_active_promotions(scope=None, now=None):
    """
    Promotions currently eligible, optionally restricted to one scope.

    Ordered by raw `value`, largest first, whatever the discount type:
    a 50% promotion and a 50 FCFA promotion compare as equals.
    """
    now = now or timezone.now()
    promotions = Promotion.objects.eligible(now).select_related("target_room", "target_service")
    if scope:
        promotions = promotions.filter(scope=scope)
    return list(promotions.order_by("-value", "-starts_at", "-id"))


def verify_code(code, scope=None, now=None):
    """
    Look up a redemption code and check it can be used right now.

    Returns (promotion, None) on success, (None, PromotionError) otherwise.
    When `scope` is given the promotion must target it or be scoped to ALL.
    """
    now = now or timezone.now()
    normalized = normalize_code(code)
    if not normalized:
        return None, PromotionError.CODE_NOT_FOUND

    promotion = (
        Promotion.objects.select_related("target_room", "target_service")
        .filter(code=normalized)
        .first()
    )
    if promotion is None:
        return None, PromotionError.CODE_NOT_FOUND

    in_window = promotion.starts_at <= now <= promotion.ends_at
    scope_matches = not scope or promotion.scope in ("ALL", scope)
    if not (promotion.is_active and in_window and scope_matches):
        return None, PromotionError.CODE_EXPIRED_OR_INACTIVE

    if promotion.is_exhausted:
        return None, PromotionError.CODE_EXHAUSTED

    return promotion, None


def get_promotion_for_item(promotions, room_id=None, service_id=None):
    """
    Pick the promotion to display next to one room or service.

    A promotion targeting that exact item wins; otherwise the first one
    without any target applies to the whole category.
    """
    for promotion in promotions:
        if room_id is not None and promotion.target_room_id == room_id:
            return promotion
        if service_id is not None and promotion.target_service_id == service_id:
            return promotion

    for promotion in promotions:
        if promotion.target_room_id is None and promotion.target_service_id is None:
            return promotion

    return None


def redeem_promotion(promotion_id):
    """
    Count one redemption of a promotion.

    The cap check and the increment are a single conditional UPDATE, so two
    concurrent redemptions competing for the last slot cannot both succeed.
    Returns (new_count, None) or (None, PromotionError).
    """
    with transaction.atomic():
        updated = (
            Promotion.objects.filter(pk=promotion_id)
            .filter(Q(max_redemptions__isnull=True) | Q(max_redemptions__gt=F("redemption_count")))
            .update(redemption_count=F("redemption_count") + 1, updated_at=timezone.now())
        )

        if updated == 0:
            if not Promotion.objects.filter(pk=promotion_id).exists():
                return None, PromotionError.PROMOTION_NOT_FOUND
            logger.info(f"Redemption refused for promotion {promotion_id}: usage limit reached")
            return None, PromotionError.USAGE_LIMIT_REACHED

        # Row stays locked by our UPDATE until commit, so this reads our own increment
        new_count = Promotion.objects.values_list("redemption_count", flat=True).get(pk=promotion_id)

    logger.info(f"Promotion {promotion_id} redeemed, count is now {new_count}")
    return new_count, None


def get_promotion_stats(now=None):
    """Counters for the admin dashboard."""
    now = now or timezone.now()
    promotions = Promotion.objects.all()

    by_scope = {}
    for row in promotions.order_by().values("scope").annotate(count=Count("id")):
        by_scope[row["scope"]] = row["count"]

    return {
        "total": promotions.count(),
        "active": promotions.filter(is_active=True, starts_at__lte=now, ends_at__gte=now).count(),
        "expired": promotions.filter(ends_at__lt=now).count(),
        "with_code": promotions.filter(code__isnull=False).count(),
        "by_scope": by_scope,
    }
