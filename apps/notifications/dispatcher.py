"""
Notification dispatcher.

Workflow services register these functions with ``transaction.on_commit``.
Every helper is fire-and-forget: failures are logged and swallowed so a
notification problem can never fail or undo the operation that caused it.
"""
import functools
import logging

from apps.notifications.models import Notification
from apps.notifications.tasks import send_decision_email

logger = logging.getLogger(__name__)

DECISION_MESSAGES = {
    'ACCEPTED': ('Manuscript Accepted', 'Your submission "{title}" has been accepted for publication.'),
    'REJECTED': ('Manuscript Rejected', 'Your submission "{title}" was not accepted.'),
    'REVISION_REQUIRED': ('Revision Required', 'Revisions have been requested for your submission "{title}".'),
}


def best_effort(func):
    """Log and swallow any exception raised by a dispatch helper."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Notification dispatch {func.__name__} failed: {e}")
            return None
    return wrapper


def submission_link(submission_id):
    return f"/submissions/{submission_id}"


def notify(user_id, notification_type, title, message, link=None):
    """Create one in-app notification row."""
    notification = Notification.objects.create(
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        link=link or '',
    )
    logger.info(f"Notification {notification_type} created for user {user_id}")
    return notification


@best_effort
def notify_submission_received(submission_id):
    from apps.submissions.models import Submission

    submission = Submission.objects.select_related('journal', 'author').get(id=submission_id)
    return notify(
        submission.journal.editor_id,
        'SUBMISSION_RECEIVED',
        'New Submission',
        f'"{submission.title}" was submitted to {submission.journal.title} by '
        f'{submission.author.display_name}.',
        submission_link(submission.id),
    )


@best_effort
def notify_review_assigned(review_id):
    from apps.reviews.models import Review

    review = Review.objects.select_related('submission').get(id=review_id)
    return notify(
        review.reviewer_id,
        'REVIEW_ASSIGNED',
        'New Review Assignment',
        f'You have been asked to review "{review.submission.title}".',
        f"/reviews/{review.id}",
    )


@best_effort
def notify_review_submitted(review_id):
    from apps.reviews.models import Review

    review = Review.objects.select_related('submission', 'reviewer').get(id=review_id)
    if review.assigned_by_id is None:
        logger.info(f"Review {review.id} has no assigning editor to notify")
        return None
    return notify(
        review.assigned_by_id,
        'REVIEW_SUBMITTED',
        'Review Submitted',
        f'{review.reviewer.display_name} recommended {review.get_recommendation_display()} '
        f'for "{review.submission.title}".',
        submission_link(review.submission_id),
    )


@best_effort
def notify_decision(decision_id):
    """
    Notify the author of a decision and queue the decision email.
    The email is attempted even if the in-app notification fails.
    """
    from apps.reviews.models import EditorialDecision

    decision = EditorialDecision.objects.select_related('submission').get(id=decision_id)
    submission = decision.submission
    title, message = DECISION_MESSAGES[decision.status]

    notification = None
    try:
        notification = notify(
            submission.author_id,
            'DECISION_MADE',
            title,
            message.format(title=submission.title),
            submission_link(submission.id),
        )
    except Exception as e:
        logger.error(f"Failed to create decision notification for {decision.id}: {e}")

    try:
        send_decision_email.delay(str(decision.id))
    except Exception as e:
        logger.warning(f"Failed to queue decision email for {decision.id}: {e}")

    return notification


@best_effort
def notify_issue_published(issue_id, submission_ids):
    """Tell every author whose submission appeared in the issue."""
    from apps.publications.models import Issue
    from apps.submissions.models import Submission

    issue = Issue.objects.select_related('journal').get(id=issue_id)
    created = []
    for submission in Submission.objects.filter(id__in=submission_ids):
        try:
            created.append(notify(
                submission.author_id,
                'ISSUE_PUBLISHED',
                'Article Published',
                f'"{submission.title}" was published in {issue.journal.title} '
                f'Vol. {issue.volume} No. {issue.issue_number} ({issue.year}).',
                submission_link(submission.id),
            ))
        except Exception as e:
            logger.error(f"Failed to notify author of submission {submission.id}: {e}")
    return created
