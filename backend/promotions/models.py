# promotions/models.py
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from catalog.models import Room, Service
from config.constants import DISCOUNT_TYPE_CHOICES, PROMOTION_SCOPE_CHOICES, as_choices


def normalize_code(code):
    """Redemption codes are compared case-insensitively: stored stripped and uppercase."""
    if code is None:
        return None
    code = code.strip().upper()
    return code or None


class PromotionQuerySet(models.QuerySet):
    def eligible(self, now=None):
        """Active, inside the inclusive window, and under the redemption cap."""
        now = now or timezone.now()
        return self.filter(
            Q(max_redemptions__isnull=True) | Q(max_redemptions__gt=F("redemption_count")),
            is_active=True,
            starts_at__lte=now,
            ends_at__gte=now,
        )


class Promotion(models.Model):
    """A time-bounded discount campaign, optionally scoped and gated by a code."""
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    discount_type = models.CharField(max_length=20, choices=as_choices(DISCOUNT_TYPE_CHOICES), default="PERCENTAGE")
    value = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    scope = models.CharField(max_length=20, choices=as_choices(PROMOTION_SCOPE_CHOICES), default="ALL")
    target_room = models.ForeignKey(Room, on_delete=models.SET_NULL, null=True, blank=True, related_name="promotions")
    target_service = models.ForeignKey(Service, on_delete=models.SET_NULL, null=True, blank=True, related_name="promotions")
    code = models.CharField(max_length=50, unique=True, null=True, blank=True)

    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()

    minimum_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_redemptions = models.PositiveIntegerField(null=True, blank=True)
    # Carried for display only, no customer identity is tracked
    max_redemptions_per_customer = models.PositiveIntegerField(default=1)
    redemption_count = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)
    terms = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PromotionQuerySet.as_manager()

    def __str__(self):
        return f"Promotion ({self.get_discount_type_display()} {self.value}) - {self.name}"

    def save(self, *args, **kwargs):
        self.code = normalize_code(self.code)
        super().save(*args, **kwargs)

    @property
    def is_exhausted(self):
        return self.max_redemptions is not None and self.redemption_count >= self.max_redemptions

    def get_status(self, now=None):
        """Position of `now` relative to the validity window."""
        now = now or timezone.now()
        if now < self.starts_at:
            return "upcoming"
        if now > self.ends_at:
            return "ended"
        return "ongoing"

    class Meta:
        ordering = ["-is_active", "-starts_at"]
        constraints = [
            models.CheckConstraint(condition=Q(starts_at__lte=F("ends_at")), name="promotion_window_ordered"),
            models.CheckConstraint(
                condition=Q(max_redemptions__isnull=True) | Q(redemption_count__lte=F("max_redemptions")),
                name="promotion_redemptions_within_cap",
            ),
        ]
