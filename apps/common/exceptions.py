"""
Workflow exceptions for the Editorial Portal.

Services raise these directly; being DRF exceptions, the API layer renders
them with the matching HTTP status without any translation.
"""
from rest_framework import exceptions, status


class WorkflowError(exceptions.APIException):
    """Base class for editorial workflow failures."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The editorial workflow rejected this operation.'
    default_code = 'workflow_error'


class Forbidden(exceptions.PermissionDenied):
    """The actor's role or ownership does not allow the operation."""
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'


class NotFound(exceptions.NotFound):
    default_detail = 'The requested record does not exist.'
    default_code = 'not_found'


class InvalidStatus(exceptions.ValidationError):
    default_detail = 'Invalid status.'
    default_code = 'invalid_status'


class InvalidRecommendation(exceptions.ValidationError):
    default_detail = 'Invalid recommendation.'
    default_code = 'invalid_recommendation'


class InvalidImage(exceptions.ValidationError):
    default_detail = 'Featured image must be a root-relative path or an http(s) URL.'
    default_code = 'invalid_image'


class InvalidRole(exceptions.ValidationError):
    default_detail = 'Invalid role.'
    default_code = 'invalid_role'


class InvalidIssue(exceptions.ValidationError):
    default_detail = 'Volume, issue number and year must be integers.'
    default_code = 'invalid_issue'


class InvalidSubmission(exceptions.ValidationError):
    default_detail = 'Title and abstract are required.'
    default_code = 'invalid_submission'


class Conflict(WorkflowError):
    """The operation collides with existing state."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This operation conflicts with the current state.'
    default_code = 'conflict'


class InvalidState(Conflict):
    default_detail = 'The record is not in a state that allows this operation.'
    default_code = 'invalid_state'


class JournalMismatch(Conflict):
    default_detail = 'The submission and the issue belong to different journals.'
    default_code = 'journal_mismatch'
