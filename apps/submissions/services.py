"""
Submission lifecycle operations.

Every operation takes an explicit ``Actor``; authorization happens before
any write and notifications are registered to run after commit.
"""
import logging

from django.db import transaction
from django.utils import timezone

from apps.common.exceptions import InvalidStatus, InvalidSubmission, NotFound
from apps.common.permissions import ADMIN, AUTHOR, EDITOR, EDITORIAL_ROLES, require_roles
from apps.journals.models import Journal
from apps.notifications import dispatcher
from apps.publications.cache import invalidate_public_pages
from .models import Contributor, Submission

logger = logging.getLogger(__name__)

CONTRIBUTOR_FIELDS = (
    'given_name', 'family_name', 'email', 'affiliation', 'orcid', 'role', 'is_primary',
)


def normalize_keywords(keywords):
    """
    Accept a comma separated string or an iterable; trim entries, drop
    blanks and duplicates, keep first-seen order.
    """
    if not keywords:
        return []
    if isinstance(keywords, str):
        keywords = keywords.split(',')

    result = []
    for keyword in keywords:
        keyword = str(keyword).strip()
        if keyword and keyword not in result:
            result.append(keyword)
    return result


def create_submission(journal_id, title, abstract, actor, keywords=(),
                      manuscript_url=None, contributors=()):
    """
    Create a SUBMITTED manuscript with its contributor list in one
    transaction and notify the journal's managing editor after commit.
    """
    require_roles(actor, ADMIN, EDITOR, AUTHOR)

    title = (title or '').strip()
    abstract = (abstract or '').strip()
    if not title or not abstract:
        raise InvalidSubmission()

    try:
        journal = Journal.objects.get(id=journal_id)
    except Journal.DoesNotExist:
        raise NotFound("Journal not found.")

    with transaction.atomic():
        submission = Submission.objects.create(
            journal=journal,
            author_id=actor.id,
            title=title,
            abstract=abstract,
            keywords=normalize_keywords(keywords),
            manuscript_url=manuscript_url or None,
            status=Submission.STATUS_SUBMITTED,
            submitted_at=timezone.now(),
        )
        Contributor.objects.bulk_create([
            Contributor(
                submission=submission,
                sequence=position,
                **{field: data[field] for field in CONTRIBUTOR_FIELDS if data.get(field) is not None}
            )
            for position, data in enumerate(contributors)
        ])
        transaction.on_commit(lambda: dispatcher.notify_submission_received(submission.id))

    logger.info(f"Submission {submission.id} created in journal {journal.slug}")
    return submission


def set_status(submission_id, next_status, actor):
    """
    Editor override: move a submission to any status except DRAFT.

    No transition table is enforced and no notification is sent; decisions
    go through ``record_decision`` instead.
    """
    require_roles(actor, *EDITORIAL_ROLES)
    if next_status not in Submission.EDITABLE_STATUSES:
        raise InvalidStatus(f"Invalid status: {next_status}")

    try:
        submission = Submission.objects.select_related('issue__journal').get(id=submission_id)
    except Submission.DoesNotExist:
        raise NotFound("Submission not found.")

    issue = submission.issue
    with transaction.atomic():
        submission.status = next_status
        submission.save(update_fields=['status', 'updated_at'])
        if issue is not None and issue.is_published:
            transaction.on_commit(lambda: invalidate_public_pages(issue))

    logger.info(f"Submission {submission.id} status set to {next_status}")
    return submission
