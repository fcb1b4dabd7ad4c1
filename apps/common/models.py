"""
Common models for the Editorial Portal.
Shared audit logging model.
"""
import uuid
from django.db import models
from django.conf import settings


class ActivityLog(models.Model):
    """
    Audit log model for tracking workflow and authentication activity.
    """
    ACTION_TYPE_CHOICES = [
        ('CREATE', 'Create'),
        ('UPDATE', 'Update'),
        ('LOGIN', 'Login'),
        ('LOGOUT', 'Logout'),
        ('SUBMIT', 'Submit'),
        ('ASSIGN', 'Assign'),
        ('REVIEW', 'Review'),
        ('APPROVE', 'Approve'),
        ('REJECT', 'Reject'),
        ('PUBLISH', 'Publish'),
        ('ROLE_CHANGE', 'Role Change'),
    ]

    ACTOR_TYPE_CHOICES = [
        ('USER', 'User'),
        ('SYSTEM', 'System'),
        ('API', 'API'),
    ]

    RESOURCE_TYPE_CHOICES = [
        ('USER', 'User'),
        ('JOURNAL', 'Journal'),
        ('SUBMISSION', 'Submission'),
        ('REVIEW', 'Review'),
        ('DECISION', 'Editorial Decision'),
        ('ISSUE', 'Issue'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Actor information
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activity_logs'
    )
    actor_type = models.CharField(max_length=20, choices=ACTOR_TYPE_CHOICES)

    # Action details
    action_type = models.CharField(max_length=20, choices=ACTION_TYPE_CHOICES)
    resource_type = models.CharField(max_length=30, choices=RESOURCE_TYPE_CHOICES)
    resource_id = models.CharField(max_length=100, help_text="ID of the affected resource")

    # Additional context
    metadata = models.JSONField(
        default=dict,
        help_text="Additional context and details about the action"
    )

    # Request information
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    session_id = models.CharField(max_length=100, blank=True)

    # Timestamp
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['action_type', 'resource_type']),
            models.Index(fields=['resource_type', 'resource_id']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        actor = self.user.email if self.user else f"({self.actor_type})"
        return f"{actor} {self.action_type} {self.resource_type} {self.resource_id}"
