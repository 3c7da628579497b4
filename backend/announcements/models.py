# announcements/models.py
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from config.constants import ANNOUNCEMENT_POSITION_CHOICES, as_choices
from promotions.models import Promotion


class AnnouncementQuerySet(models.QuerySet):
    def running(self, now=None):
        now = now or timezone.now()
        return self.filter(is_active=True, starts_at__lte=now, ends_at__gte=now)


class Announcement(models.Model):
    """Marketing banner shown on the public site, optionally advertising a promotion."""
    title = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    link = models.URLField(blank=True)
    button_text = models.CharField(max_length=50, blank=True)
    position = models.CharField(max_length=20, choices=as_choices(ANNOUNCEMENT_POSITION_CHOICES), default="HOME")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    is_pinned = models.BooleanField(default=False)
    # Lookup only: the promotion cannot be deleted while referenced here
    promotion = models.ForeignKey(Promotion, on_delete=models.PROTECT, null=True, blank=True, related_name="announcements")

    created_at = models.DateTimeField(auto_now_add=True)

    objects = AnnouncementQuerySet.as_manager()

    def __str__(self):
        return self.title

    class Meta:
        ordering = ["-is_pinned", "order", "-starts_at"]
        constraints = [
            models.CheckConstraint(condition=Q(starts_at__lte=F("ends_at")), name="announcement_window_ordered"),
        ]
