"""
Notification inbox operations for the signed-in user.
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError

from apps.common.exceptions import NotFound
from .models import Notification

logger = logging.getLogger(__name__)


def list_notifications(actor, unread_only=False):
    """The actor's newest notifications, capped by NOTIFICATION_LIST_LIMIT."""
    queryset = Notification.objects.filter(user_id=actor.id)
    if unread_only:
        queryset = queryset.filter(read=False)
    return list(queryset.order_by('-created_at')[:settings.WORKFLOW['NOTIFICATION_LIST_LIMIT']])


def mark_notification_read(notification_id, actor):
    """
    Mark one of the actor's notifications read. Someone else's notification
    is reported as missing.
    """
    try:
        notification = Notification.objects.get(id=notification_id, user_id=actor.id)
    except (Notification.DoesNotExist, ValidationError):
        raise NotFound("Notification not found.")

    if not notification.read:
        notification.read = True
        notification.save(update_fields=['read'])
    return notification


def mark_all_notifications_read(actor):
    updated = Notification.objects.filter(user_id=actor.id, read=False).update(read=True)
    logger.info(f"Marked {updated} notifications read for user {actor.id}")
    return updated


def unread_count(actor):
    return Notification.objects.filter(user_id=actor.id, read=False).count()
