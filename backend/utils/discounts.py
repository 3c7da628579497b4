from decimal import Decimal, ROUND_HALF_UP
from django.conf import settings
import logging

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
# fr-FR digit grouping, as shown on the public site
GROUP_SEPARATOR = "\u202f"
DECIMAL_SEPARATOR = ","


def to_decimal(amount):
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def round_to_unit(amount):
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_discounted_price(base_price, promotion):
    """
    Price after applying `promotion` to `base_price`, in whole currency units.

    Returns None when the promotion does not produce a valid price:
    a fixed amount that would bring the price to zero or below, a base price
    under the promotion's minimum amount, or an unknown discount type.
    """
    base = to_decimal(base_price)
    value = to_decimal(promotion.value)

    if promotion.minimum_amount is not None and base < to_decimal(promotion.minimum_amount):
        return None

    if promotion.discount_type == "PERCENTAGE":
        return round_to_unit(base * (1 - value / HUNDRED))
    elif promotion.discount_type == "FIXED_AMOUNT":
        result = base - value
        if result <= 0:
            return None
        return round_to_unit(result)

    logger.warning(f"Unknown discount type {promotion.discount_type!r} on promotion {promotion.pk}")
    return None


def compute_discount_amount(base_price, promotion):
    """How much the customer saves, or None when the promotion does not apply."""
    discounted = compute_discounted_price(base_price, promotion)
    if discounted is None:
        return None
    return round_to_unit(to_decimal(base_price)) - discounted


def format_number(value, grouped=False):
    value = to_decimal(value)
    if value == value.to_integral_value():
        value = int(value)
    else:
        value = value.normalize()

    if not grouped:
        return str(value)
    return f"{value:,}".translate(str.maketrans({",": GROUP_SEPARATOR, ".": DECIMAL_SEPARATOR}))


def format_promotion_label(promotion):
    """Short badge text: "-20%", "-5 000 FCFA", or the promotion name."""
    if promotion.discount_type == "PERCENTAGE":
        return f"-{format_number(promotion.value)}%"
    elif promotion.discount_type == "FIXED_AMOUNT":
        currency = getattr(settings, "PROMOTIONS_CURRENCY_LABEL", "FCFA")
        return f"-{format_number(promotion.value, grouped=True)} {currency}"
    return promotion.name
