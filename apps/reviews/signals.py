"""
Django signals for the reviews app.

Records reviewer assignments, review submissions and editorial decisions in
the activity log.
"""
from django.db.models.signals import post_save
from django.dispatch import receiver
from apps.reviews.models import Review, EditorialDecision
from apps.common.utils.activity_logger import log_user_action
import logging

logger = logging.getLogger(__name__)

DECISION_ACTIONS = {
    'ACCEPTED': 'APPROVE',
    'REJECTED': 'REJECT',
    'REVISION_REQUIRED': 'UPDATE',
}


@receiver(post_save, sender=Review)
def log_review_activity(sender, instance, created, **kwargs):
    """
    Creation is logged against the assigning editor, submission against the reviewer.
    """
    try:
        if created:
            log_user_action(
                user=instance.assigned_by,
                action_type='ASSIGN',
                resource_type='REVIEW',
                resource_id=instance.id,
                metadata={
                    'reviewer_email': instance.reviewer.email,
                    'submission_id': str(instance.submission_id),
                }
            )
            logger.info(f"Logged ASSIGN REVIEW for {instance.id}")
        elif instance.submitted_at:
            log_user_action(
                user=instance.reviewer,
                action_type='REVIEW',
                resource_type='REVIEW',
                resource_id=instance.id,
                metadata={
                    'recommendation': instance.recommendation,
                    'score': instance.score,
                    'submission_id': str(instance.submission_id),
                }
            )
            logger.info(f"Logged REVIEW for {instance.id} by {instance.reviewer.email}")
    except Exception as e:
        logger.error(f"Failed to log review activity: {e}")


@receiver(post_save, sender=EditorialDecision)
def log_editorial_decision_activity(sender, instance, created, **kwargs):
    if not created:
        return
    try:
        action_type = DECISION_ACTIONS.get(instance.status, 'UPDATE')
        log_user_action(
            user=instance.decided_by,
            action_type=action_type,
            resource_type='DECISION',
            resource_id=instance.id,
            metadata={
                'status': instance.status,
                'submission_id': str(instance.submission_id),
                'submission_title': instance.submission.title,
            }
        )
        logger.info(f"Logged {action_type} DECISION for submission {instance.submission_id}")
    except Exception as e:
        logger.error(f"Failed to log editorial decision activity: {e}")
