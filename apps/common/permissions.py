"""
Role context and permissions for the Editorial Portal.

Services receive an explicit Actor rather than reading the request user, so
they can be driven from views, management commands and tests alike.
"""
from dataclasses import dataclass
import uuid

from rest_framework import permissions

from apps.common.exceptions import Forbidden


ADMIN = 'ADMIN'
EDITOR = 'EDITOR'
REVIEWER = 'REVIEWER'
AUTHOR = 'AUTHOR'

APP_ROLES = (ADMIN, EDITOR, REVIEWER, AUTHOR)
EDITORIAL_ROLES = (ADMIN, EDITOR)


@dataclass(frozen=True)
class Actor:
    """Authenticated identity carrying a single role label."""
    id: uuid.UUID
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(id=user.id, role=user.role)


def require_roles(actor, *roles):
    """Raise Forbidden unless the actor holds one of ``roles``."""
    if actor.role not in roles:
        raise Forbidden(f"Role {actor.role} may not perform this action.")


def ensure_journal_manager(actor, journal):
    """
    Admins manage every journal; an editor manages only the journals where
    they are the managing editor.
    """
    require_roles(actor, *EDITORIAL_ROLES)
    if actor.role == EDITOR and journal.editor_id != actor.id:
        raise Forbidden("Only the journal's managing editor may perform this action.")


class IsAdminRole(permissions.BasePermission):
    """
    Permission for users holding the ADMIN role.
    """

    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated
            and getattr(request.user, 'role', None) == ADMIN
        )


class IsEditorialOrReadOnly(permissions.BasePermission):
    """
    Read access for any authenticated user, writes for ADMIN and EDITOR.
    """

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return getattr(request.user, 'role', None) in EDITORIAL_ROLES
