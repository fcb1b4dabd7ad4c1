"""
Activity logging helpers.

Writes ActivityLog rows for workflow and authentication events. A failure
to write the audit row is logged and never propagates to the caller.
"""
import logging

from django.db import transaction

from apps.common.models import ActivityLog

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """
    Extract the client IP address from the request, honouring the first
    hop of X-Forwarded-For when present.
    """
    if not request:
        return None

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def log_activity(user, action_type, resource_type, resource_id,
                 metadata=None, request=None, actor_type=None):
    """
    Create an ActivityLog entry.

    Args:
        user: User instance or None for system actions
        action_type: CREATE, ASSIGN, REVIEW, PUBLISH, ...
        resource_type: SUBMISSION, REVIEW, DECISION, ISSUE, ...
        resource_id: ID of the resource (string or UUID)
        metadata: Optional dict of additional data
        request: Optional request for IP, user agent and session
        actor_type: Optional override (USER, SYSTEM, API)

    Returns:
        ActivityLog or None when the row could not be written
    """
    if actor_type is None:
        actor_type = 'USER' if user else 'SYSTEM'

    log_data = {
        'user': user,
        'actor_type': actor_type,
        'action_type': action_type,
        'resource_type': resource_type,
        'resource_id': str(resource_id),
        'metadata': metadata or {},
    }

    if request:
        log_data['ip_address'] = get_client_ip(request)
        log_data['user_agent'] = request.META.get('HTTP_USER_AGENT', '')
        session = getattr(request, 'session', None)
        log_data['session_id'] = (session.session_key if session else None) or ''

    try:
        with transaction.atomic():
            return ActivityLog.objects.create(**log_data)
    except Exception as e:
        logger.error(f"Failed to create activity log: {e}")
        return None


def log_user_action(user, action_type, resource_type, resource_id,
                    metadata=None, request=None):
    """Log an action attributed to a user."""
    return log_activity(
        user=user,
        action_type=action_type,
        resource_type=resource_type,
        resource_id=resource_id,
        metadata=metadata,
        request=request,
        actor_type='USER'
    )
