"""
Review assignment, review submission and editorial decision operations.
"""
import logging
import re

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import (
    Conflict,
    Forbidden,
    InvalidRecommendation,
    InvalidRole,
    InvalidState,
    InvalidStatus,
    NotFound,
)
from apps.common.permissions import EDITORIAL_ROLES, REVIEWER, require_roles
from apps.notifications import dispatcher
from apps.publications.cache import invalidate_public_pages
from apps.submissions.models import Submission
from .models import EditorialDecision, Review

logger = logging.getLogger(__name__)

DECISION_STATUSES = tuple(value for value, _ in EditorialDecision.STATUS_CHOICES)
RECOMMENDATIONS = tuple(value for value, _ in Review.RECOMMENDATION_CHOICES)

_LEADING_INTEGER = re.compile(r'^\s*([+-]?\d+)')


def parse_score(score):
    """
    Read the leading integer of ``score`` and clamp it into [1, 5].
    Anything without a leading integer yields None.
    """
    if score is None or isinstance(score, bool):
        return None
    match = _LEADING_INTEGER.match(str(score))
    if not match:
        return None
    return max(Review.MIN_SCORE, min(Review.MAX_SCORE, int(match.group(1))))


def _blank_to_none(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _get_submission(submission_id):
    try:
        return Submission.objects.select_related('journal', 'author', 'issue__journal').get(id=submission_id)
    except Submission.DoesNotExist:
        raise NotFound("Submission not found.")


def assign_reviewer(submission_id, reviewer_id, actor):
    """
    Create a pending review and move the submission to UNDER_REVIEW.

    Every assignment forces UNDER_REVIEW, whatever the current status. A
    second assignment of the same reviewer raises Conflict and writes nothing.
    """
    require_roles(actor, *EDITORIAL_ROLES)
    submission = _get_submission(submission_id)

    User = get_user_model()
    try:
        reviewer = User.objects.get(id=reviewer_id)
    except User.DoesNotExist:
        raise NotFound("Reviewer not found.")

    if settings.WORKFLOW['REQUIRE_REVIEWER_ROLE'] and reviewer.role != REVIEWER:
        raise InvalidRole(f"{reviewer.email} does not hold the REVIEWER role.")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                submission=submission,
                reviewer=reviewer,
                assigned_by_id=actor.id,
            )
            submission.status = Submission.STATUS_UNDER_REVIEW
            submission.save(update_fields=['status', 'updated_at'])
            transaction.on_commit(lambda: dispatcher.notify_review_assigned(review.id))
    except IntegrityError:
        raise Conflict("This reviewer is already assigned to the submission.")

    logger.info(f"Reviewer {reviewer.id} assigned to submission {submission.id}")
    return review


def submit_review(review_id, recommendation, score, comments_to_author, comments_to_editor, actor):
    """
    Record the assigned reviewer's recommendation.

    Checks run in a fixed order: existence, ownership, role, then the
    recommendation value. Resubmitting overwrites the previous answers.
    The submission status is left untouched.
    """
    try:
        review = Review.objects.select_related('submission').get(id=review_id)
    except Review.DoesNotExist:
        raise NotFound("Review not found.")

    if review.reviewer_id != actor.id:
        raise Forbidden("Only the assigned reviewer may submit this review.")
    require_roles(actor, REVIEWER)

    if recommendation not in RECOMMENDATIONS:
        raise InvalidRecommendation(f"Invalid recommendation: {recommendation}")

    review.recommendation = recommendation
    review.score = parse_score(score)
    review.comments_to_author = _blank_to_none(comments_to_author)
    review.comments_to_editor = _blank_to_none(comments_to_editor)
    review.submitted_at = timezone.now()

    with transaction.atomic():
        review.save()
        transaction.on_commit(lambda: dispatcher.notify_review_submitted(review.id))

    logger.info(f"Review {review.id} submitted with recommendation {recommendation}")
    return review


def record_decision(submission_id, status, notes, actor):
    """
    Set the submission status and append an EditorialDecision atomically.

    The author's notification and decision email run after commit and can
    never undo or fail the decision.
    """
    require_roles(actor, *EDITORIAL_ROLES)
    if status not in DECISION_STATUSES:
        raise InvalidStatus(f"Invalid decision status: {status}")

    submission = _get_submission(submission_id)

    if (settings.WORKFLOW['REQUIRE_REVIEW_BEFORE_DECISION']
            and status in (Submission.STATUS_ACCEPTED, Submission.STATUS_REJECTED)
            and not submission.reviews.filter(submitted_at__isnull=False).exists()):
        raise InvalidState("At least one submitted review is required before this decision.")

    with transaction.atomic():
        submission.status = status
        submission.save(update_fields=['status', 'updated_at'])
        decision = EditorialDecision.objects.create(
            submission=submission,
            decided_by_id=actor.id,
            status=status,
            notes=_blank_to_none(notes),
            decided_at=timezone.now(),
        )
        transaction.on_commit(lambda: dispatcher.notify_decision(decision.id))
        issue = submission.issue
        if issue is not None and issue.is_published:
            transaction.on_commit(lambda: invalidate_public_pages(issue))

    logger.info(f"Decision {status} recorded for submission {submission.id}")
    return decision
