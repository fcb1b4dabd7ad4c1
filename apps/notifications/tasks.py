"""
Celery tasks for email notifications.
Handles async email sending with retry logic.
"""
from celery import shared_task
from django.core.mail import EmailMultiAlternatives
from django.template import Context, Template
from django.utils import timezone
from django.utils.html import strip_tags
from django.conf import settings
import logging

logger = logging.getLogger(__name__)

DECISION_TEMPLATE_TYPES = {
    'ACCEPTED': 'DECISION_ACCEPTED',
    'REJECTED': 'DECISION_REJECTED',
    'REVISION_REQUIRED': 'DECISION_REVISION_REQUIRED',
}


def _mark_failed_attempt(email_log_id, exc):
    from apps.notifications.models import EmailLog

    try:
        email_log = EmailLog.objects.get(id=email_log_id)
    except EmailLog.DoesNotExist:
        return
    email_log.retry_count += 1
    email_log.error_message = str(exc)
    if email_log.retry_count >= email_log.max_retries:
        email_log.status = 'FAILED'
        logger.error(f"Email {email_log_id} failed after {email_log.retry_count} attempts")
    else:
        email_log.status = 'PENDING'
    email_log.save(update_fields=['retry_count', 'error_message', 'status', 'updated_at'])


@shared_task(bind=True, max_retries=3, default_retry_delay=300)
def send_email_task(self, email_log_id):
    """
    Send an email using the EmailLog record.
    Retries up to 3 times with 5 minute delays.
    """
    from apps.notifications.models import EmailLog

    try:
        email_log = EmailLog.objects.get(id=email_log_id)
    except EmailLog.DoesNotExist:
        logger.error(f"EmailLog {email_log_id} not found")
        return {'status': 'error', 'message': 'EmailLog not found'}

    try:
        email = EmailMultiAlternatives(
            subject=email_log.subject,
            body=email_log.body_text or '',
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[email_log.recipient],
        )
        if email_log.body_html:
            email.attach_alternative(email_log.body_html, "text/html")
        email.send(fail_silently=False)
    except Exception as exc:
        logger.error(f"Failed to send email {email_log_id}: {exc}")
        _mark_failed_attempt(email_log_id, exc)
        if self.request.retries >= self.max_retries:
            return {'status': 'failed', 'email_log_id': str(email_log_id)}
        raise self.retry(exc=exc)

    email_log.status = 'SENT'
    email_log.sent_at = timezone.now()
    email_log.error_message = ''
    email_log.save(update_fields=['status', 'sent_at', 'error_message', 'updated_at'])

    logger.info(f"Email sent successfully to {email_log.recipient} (template: {email_log.template_type})")
    return {
        'status': 'success',
        'email_log_id': str(email_log_id),
        'recipient': email_log.recipient
    }


def _load_template(template_type):
    """
    Return (subject, html_body, text_body) sources for ``template_type``.
    An active EmailTemplate row wins over the built-in default.
    """
    from apps.notifications.email_templates import DEFAULT_TEMPLATES
    from apps.notifications.models import EmailTemplate

    template = EmailTemplate.objects.filter(template_type=template_type, is_active=True).first()
    if template:
        return template.subject, template.html_body, template.text_body

    default = DEFAULT_TEMPLATES.get(template_type)
    if default is None:
        raise LookupError(f"No email template for {template_type}")
    return default['subject'], default['html_body'], default.get('text_body', '')


@shared_task
def send_template_email(recipient, template_type, context, user_id=None):
    """
    Render a template, record it in EmailLog and hand it to ``send_email_task``.

    Args:
        recipient: Email address
        template_type: Type of email template to use
        context: Dictionary of template variables
        user_id: Optional recipient user ID
    """
    from apps.notifications.models import EmailLog

    try:
        subject_source, html_source, text_source = _load_template(template_type)
    except LookupError as e:
        logger.error(str(e))
        return {'status': 'error', 'message': str(e)}

    subject = Template(subject_source).render(Context(context)).strip()
    html_body = Template(html_source).render(Context(context))
    if text_source:
        text_body = Template(text_source).render(Context(context))
    else:
        text_body = strip_tags(html_body)

    email_log = EmailLog.objects.create(
        recipient=recipient,
        user_id=user_id,
        template_type=template_type,
        subject=subject,
        body_html=html_body,
        body_text=text_body,
        context_data=context,
        status='PENDING'
    )

    try:
        send_email_task.delay(str(email_log.id))
    except Exception as e:
        logger.error(f"Failed to queue email {email_log.id}: {e}")
        email_log.status = 'FAILED'
        email_log.error_message = str(e)
        email_log.save(update_fields=['status', 'error_message', 'updated_at'])
        return {'status': 'failed', 'email_log_id': str(email_log.id)}

    logger.info(f"Email queued: {template_type} to {recipient}")
    return {
        'status': 'queued',
        'email_log_id': str(email_log.id),
        'recipient': recipient,
        'template_type': template_type
    }


@shared_task
def send_decision_email(decision_id):
    """
    Email the submitting author about an editorial decision.
    """
    from apps.reviews.models import EditorialDecision

    try:
        decision = EditorialDecision.objects.select_related(
            'submission__author', 'submission__journal'
        ).get(id=decision_id)
    except EditorialDecision.DoesNotExist:
        logger.error(f"EditorialDecision {decision_id} not found")
        return {'status': 'error', 'message': 'EditorialDecision not found'}

    submission = decision.submission
    author = submission.author
    context = {
        'author_name': author.display_name,
        'submission_title': submission.title,
        'journal_title': submission.journal.title,
        'decision': decision.status,
        'notes': decision.notes or '',
        'submission_url': f"{settings.FRONTEND_URL}/submissions/{submission.id}",
    }
    return send_template_email(
        author.email,
        DECISION_TEMPLATE_TYPES[decision.status],
        context,
        user_id=str(author.id),
    )
