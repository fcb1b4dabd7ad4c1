"""
Notification models for the Editorial Portal.
In-app notifications, editable email templates and the email delivery log.
"""
import uuid
from django.db import models
from django.conf import settings


class Notification(models.Model):
    """
    In-app message to one user. Only its owner may mark it read.
    """
    TYPE_CHOICES = [
        ('SUBMISSION_RECEIVED', 'Submission Received'),
        ('REVIEW_ASSIGNED', 'Review Assigned'),
        ('REVIEW_SUBMITTED', 'Review Submitted'),
        ('DECISION_MADE', 'Editorial Decision'),
        ('ISSUE_PUBLISHED', 'Issue Published'),
        ('SYSTEM', 'System'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, default='SYSTEM')
    title = models.CharField(max_length=255)
    message = models.TextField()
    link = models.CharField(max_length=500, blank=True, help_text="Frontend path for the related record")
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'read']),
            models.Index(fields=['user', 'created_at']),
        ]

    def __str__(self):
        return f"{self.title} -> {self.user}"


class EmailTemplate(models.Model):
    """
    Editable email template. Subject and bodies use Django template syntax.
    """
    TEMPLATE_TYPES = [
        ('DECISION_ACCEPTED', 'Manuscript Accepted'),
        ('DECISION_REJECTED', 'Manuscript Rejected'),
        ('DECISION_REVISION_REQUIRED', 'Revision Required'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    template_type = models.CharField(
        max_length=50,
        choices=TEMPLATE_TYPES,
        unique=True,
        help_text="Type of email template"
    )
    name = models.CharField(max_length=200, help_text="Human-readable template name")
    subject = models.CharField(max_length=255, help_text="Email subject line (supports variables)")
    html_body = models.TextField(help_text="HTML email body (supports variables)")
    text_body = models.TextField(blank=True, help_text="Plain text fallback (derived from HTML if empty)")
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['template_type']

    def __str__(self):
        return f"{self.name} ({self.get_template_type_display()})"


class EmailLog(models.Model):
    """
    One row per transactional email attempt.
    """
    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('SENT', 'Sent'),
        ('FAILED', 'Failed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.EmailField(help_text="Recipient email address")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='sent_emails'
    )
    template_type = models.CharField(max_length=50, blank=True)

    subject = models.CharField(max_length=255)
    body_html = models.TextField(blank=True)
    body_text = models.TextField(blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    sent_at = models.DateTimeField(null=True, blank=True)

    error_message = models.TextField(blank=True)
    retry_count = models.IntegerField(default=0)
    max_retries = models.IntegerField(default=3)

    context_data = models.JSONField(default=dict, help_text="Template context data used")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'status']),
            models.Index(fields=['status', 'created_at']),
        ]

    def __str__(self):
        return f"Email to {self.recipient} - {self.status}"
