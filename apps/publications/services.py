"""
Issue publication operations.

Every operation requires the actor to manage the issue's journal: admins
manage all journals, editors only those they are the managing editor of.
"""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import (
    Conflict,
    InvalidIssue,
    InvalidImage,
    InvalidState,
    JournalMismatch,
    NotFound,
)
from apps.common.permissions import ensure_journal_manager
from apps.journals.models import Journal
from apps.submissions.models import Submission
from .cache import invalidate_public_pages
from .models import Issue
from .signals import issue_published

logger = logging.getLogger(__name__)

_http_url = URLValidator(schemes=['http', 'https'])


def normalize_featured_image(image):
    """
    Return a clean image location, or None when ``image`` is blank.

    Accepts a root-relative path ("/covers/1.jpg") or an http(s) URL;
    anything else raises InvalidImage.
    """
    image = (image or '').strip()
    if not image:
        return None
    if image.startswith('/') and not image.startswith('//'):
        return image
    try:
        _http_url(image)
    except ValidationError:
        raise InvalidImage()
    return image


def _parse_positive_int(value, field):
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidIssue(f"{field} must be an integer.")
    if number < 1:
        raise InvalidIssue(f"{field} must be positive.")
    return number


def _get_issue(issue_id):
    try:
        return Issue.objects.select_related('journal').get(id=issue_id)
    except Issue.DoesNotExist:
        raise NotFound("Issue not found.")


def create_issue(journal_id, volume, issue_number, year, actor, title=None, featured_image_url=None):
    """
    Create a draft issue. A second issue with the same journal, volume,
    number and year raises Conflict.
    """
    try:
        journal = Journal.objects.get(id=journal_id)
    except Journal.DoesNotExist:
        raise NotFound("Journal not found.")
    ensure_journal_manager(actor, journal)

    values = {
        'volume': _parse_positive_int(volume, 'volume'),
        'issue_number': _parse_positive_int(issue_number, 'issue_number'),
        'year': _parse_positive_int(year, 'year'),
        'title': (title or '').strip() or None,
        'featured_image_url': normalize_featured_image(featured_image_url),
    }

    try:
        with transaction.atomic():
            issue = Issue.objects.create(journal=journal, **values)
    except IntegrityError:
        raise Conflict(
            f"Volume {values['volume']} issue {values['issue_number']} ({values['year']}) "
            f"already exists for {journal.title}."
        )

    logger.info(f"Issue {issue.id} created for journal {journal.slug}")
    return issue


def assign_submission_to_issue(issue_id, submission_id, actor):
    """
    Schedule an accepted submission in an issue of the same journal.

    Assigning to an already published issue publishes the submission at
    once; otherwise it stays ACCEPTED until the issue is published.
    """
    issue = _get_issue(issue_id)
    ensure_journal_manager(actor, issue.journal)

    try:
        submission = Submission.objects.select_related('issue__journal').get(id=submission_id)
    except Submission.DoesNotExist:
        raise NotFound("Submission not found.")

    if submission.status not in Submission.ISSUE_ASSIGNABLE_STATUSES:
        raise InvalidState("Only accepted or published submissions can be assigned to an issue.")
    if submission.journal_id != issue.journal_id:
        raise JournalMismatch()

    previous_issue = submission.issue
    with transaction.atomic():
        submission.issue = issue
        submission.status = Submission.STATUS_PUBLISHED if issue.is_published else Submission.STATUS_ACCEPTED
        submission.save(update_fields=['issue', 'status', 'updated_at'])
        if issue.is_published:
            transaction.on_commit(lambda: invalidate_public_pages(issue))
        if previous_issue is not None and previous_issue.id != issue.id and previous_issue.is_published:
            transaction.on_commit(lambda: invalidate_public_pages(previous_issue))

    logger.info(f"Submission {submission.id} assigned to issue {issue.id} ({submission.status})")
    return submission


def publish_issue(issue_id, actor):
    """
    Stamp ``published_at`` and publish every submission in the issue,
    all in one transaction.

    Publishing an already published issue changes nothing: the original
    timestamp stays and no submission is touched.
    """
    issue = _get_issue(issue_id)
    ensure_journal_manager(actor, issue.journal)

    with transaction.atomic():
        now = timezone.now()
        claimed = Issue.objects.filter(id=issue.id, published_at__isnull=True).update(
            published_at=now, updated_at=now
        )
        if not claimed:
            logger.info(f"Issue {issue.id} is already published")
            issue.refresh_from_db()
            return issue

        pending = Submission.objects.filter(issue=issue).exclude(status=Submission.STATUS_PUBLISHED)
        submission_ids = list(pending.values_list('id', flat=True))
        Submission.objects.filter(id__in=submission_ids).exclude(
            status=Submission.STATUS_PUBLISHED
        ).update(status=Submission.STATUS_PUBLISHED, updated_at=now)
        issue.refresh_from_db()

        transaction.on_commit(lambda: issue_published.send_robust(
            sender=Issue,
            issue=issue,
            submission_ids=submission_ids,
            actor_id=actor.id,
        ))

    logger.info(f"Issue {issue.id} published with {len(submission_ids)} submissions")
    return issue


def update_issue_featured_image(issue_id, image, actor):
    """Set or clear (blank input) the issue's featured image."""
    issue = _get_issue(issue_id)
    ensure_journal_manager(actor, issue.journal)

    issue.featured_image_url = normalize_featured_image(image)
    with transaction.atomic():
        issue.save(update_fields=['featured_image_url', 'updated_at'])
        if issue.is_published:
            transaction.on_commit(lambda: invalidate_public_pages(issue))

    logger.info(f"Featured image of issue {issue.id} updated")
    return issue
