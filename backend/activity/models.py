# activity/models.py
from django.conf import settings
from django.db import models
from config.constants import ACTIVITY_ACTION_CHOICES, as_choices


class ActivityLog(models.Model):
    """Audit trail entry for a change made from the admin dashboard."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="activity_logs")
    # Copied at write time so entries stay readable after the account is removed
    user_name = models.CharField(max_length=255, blank=True)
    user_email = models.EmailField(blank=True)
    action = models.CharField(max_length=20, choices=as_choices(ACTIVITY_ACTION_CHOICES))
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64, blank=True)
    description = models.CharField(max_length=255)
    metadata = models.JSONField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.action} {self.entity_type} ({self.entity_id}) by {self.user_email or 'system'}"

    class Meta:
        ordering = ["-created_at", "-id"]
