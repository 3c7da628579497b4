# activity/tasks.py
from celery import shared_task
from django.contrib.auth import get_user_model
import logging

from .models import ActivityLog

logger = logging.getLogger(__name__)


@shared_task
def write_activity_log(user_id, action, entity_type, entity_id, description, metadata=None):
    """Persist one activity log entry. Failures are logged, never raised."""
    try:
        user = get_user_model().objects.filter(pk=user_id).first() if user_id else None
        ActivityLog.objects.create(
            user=user,
            user_name=user.name if user else "",
            user_email=user.email if user else "",
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else "",
            description=description,
            metadata=metadata,
        )
    except Exception as e:
        logger.error(f"Failed to write activity log ({action} {entity_type} {entity_id}): {e}")


def log_activity(user, action, entity_type, entity_id, description, metadata=None):
    """Queue an activity log entry for the given (possibly anonymous) user."""
    user_id = user.pk if user is not None and user.is_authenticated else None
    try:
        write_activity_log.delay(user_id, action, entity_type, entity_id, description, metadata)
    except Exception as e:
        # Broker unavailable: the admin operation itself already succeeded
        logger.error(f"Could not queue activity log for {entity_type} {entity_id}: {e}")
