"""
User administration operations.
"""
import logging

from django.contrib.auth import get_user_model

from apps.common.exceptions import Conflict, Forbidden, InvalidRole, NotFound
from apps.common.permissions import APP_ROLES, ADMIN, EDITORIAL_ROLES, require_roles
from apps.common.utils.activity_logger import log_activity

logger = logging.getLogger(__name__)


def change_user_role(user_id, role, actor):
    """
    Set another user's role. Only administrators may do this, and never on
    their own account. A managing editor keeps an editorial role until their
    journals are handed to someone else.
    """
    require_roles(actor, ADMIN)
    if role not in APP_ROLES:
        raise InvalidRole(f"Unknown role: {role}")
    if str(user_id) == str(actor.id):
        raise Forbidden("You cannot change your own role.")

    User = get_user_model()
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found.")

    if role not in EDITORIAL_ROLES and user.managed_journals.exists():
        raise Conflict("This user manages a journal; reassign it before removing the editorial role.")

    previous_role = user.role
    user.role = role
    user.save(update_fields=['role', 'updated_at'])

    log_activity(
        user=User.objects.filter(id=actor.id).first(),
        action_type='ROLE_CHANGE',
        resource_type='USER',
        resource_id=user.id,
        metadata={'old_role': previous_role, 'new_role': role},
    )
    logger.info(f"Role of user {user.id} changed from {previous_role} to {role}")
    return user
