"""
Django signals for the submissions app.

Records submission creation and status changes in the activity log.
"""
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from apps.submissions.models import Submission
from apps.common.utils.activity_logger import log_user_action
import logging

logger = logging.getLogger(__name__)

STATUS_ACTIONS = {
    'SUBMITTED': 'SUBMIT',
    'ACCEPTED': 'APPROVE',
    'REJECTED': 'REJECT',
    'PUBLISHED': 'PUBLISH',
}


@receiver(pre_save, sender=Submission)
def track_submission_status(sender, instance, **kwargs):
    """
    Remember the stored status so the post_save receiver can detect changes.
    """
    instance._previous_status = (
        Submission.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    )


@receiver(post_save, sender=Submission)
def log_submission_activity(sender, instance, created, **kwargs):
    try:
        if created:
            log_user_action(
                user=instance.author,
                action_type='CREATE',
                resource_type='SUBMISSION',
                resource_id=instance.id,
                metadata={
                    'title': instance.title,
                    'journal': instance.journal.slug,
                    'status': instance.status
                }
            )
            logger.info(f"Logged CREATE SUBMISSION for {instance.id}")
            return

        old_status = getattr(instance, '_previous_status', None)
        if old_status and old_status != instance.status:
            action_type = STATUS_ACTIONS.get(instance.status, 'UPDATE')
            log_user_action(
                user=instance.author,
                action_type=action_type,
                resource_type='SUBMISSION',
                resource_id=instance.id,
                metadata={
                    'old_status': old_status,
                    'new_status': instance.status
                }
            )
            logger.info(f"Logged {action_type} SUBMISSION for {instance.id}")
    except Exception as e:
        logger.error(f"Failed to log submission activity: {e}")
