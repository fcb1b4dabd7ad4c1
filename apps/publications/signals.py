"""
Signals for the publications app.

``issue_published`` fires once per issue, after the publishing transaction
commits. Receivers are best-effort: each one logs its own failures.
"""
from django.contrib.auth import get_user_model
from django.dispatch import Signal, receiver
from apps.common.utils.activity_logger import log_user_action
from apps.notifications import dispatcher
from .cache import invalidate_public_pages
import logging

logger = logging.getLogger(__name__)

# Sent with: issue, submission_ids (newly published), actor_id
issue_published = Signal()


@receiver(issue_published)
def refresh_public_pages(sender, issue, **kwargs):
    invalidate_public_pages(issue)


@receiver(issue_published)
def notify_published_authors(sender, issue, submission_ids, **kwargs):
    dispatcher.notify_issue_published(issue.id, submission_ids)


@receiver(issue_published)
def log_issue_publication(sender, issue, submission_ids, actor_id=None, **kwargs):
    try:
        User = get_user_model()
        log_user_action(
            user=User.objects.filter(id=actor_id).first(),
            action_type='PUBLISH',
            resource_type='ISSUE',
            resource_id=issue.id,
            metadata={
                'journal': issue.journal.slug,
                'published_at': issue.published_at.isoformat() if issue.published_at else None,
                'submission_ids': [str(submission_id) for submission_id in submission_ids],
            }
        )
    except Exception as e:
        logger.error(f"Failed to log issue publication: {e}")
