"""
Review models for the Editorial Portal.
Handles reviewer assignments with their recommendations, and the append-only
editorial decision log.
"""
import uuid
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator


class Review(models.Model):
    """
    One reviewer's assignment on a submission. Pending until
    ``submitted_at`` is set; never deleted.
    """
    RECOMMENDATION_CHOICES = [
        ('ACCEPT', 'Accept'),
        ('MINOR_REVISION', 'Minor Revision'),
        ('MAJOR_REVISION', 'Major Revision'),
        ('REJECT', 'Reject'),
    ]

    MIN_SCORE = 1
    MAX_SCORE = 5

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    submission = models.ForeignKey(
        'submissions.Submission',
        on_delete=models.PROTECT,
        related_name='reviews'
    )
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='reviews'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_reviews',
        help_text="Editor or admin who made the assignment"
    )

    recommendation = models.CharField(
        max_length=20,
        choices=RECOMMENDATION_CHOICES,
        null=True,
        blank=True
    )
    score = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(MIN_SCORE), MaxValueValidator(MAX_SCORE)],
        help_text="Overall score (1-5)"
    )
    comments_to_author = models.TextField(null=True, blank=True)
    comments_to_editor = models.TextField(null=True, blank=True)

    submitted_at = models.DateTimeField(null=True, blank=True, help_text="Null while the review is pending")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['reviewer', 'submitted_at']),
            models.Index(fields=['submission', 'submitted_at']),
        ]
        constraints = [
            models.UniqueConstraint(fields=['submission', 'reviewer'], name='unique_review_per_reviewer'),
            models.CheckConstraint(
                condition=models.Q(score__isnull=True) | models.Q(score__gte=1, score__lte=5),
                name='review_score_range',
            ),
        ]

    def __str__(self):
        return f"Review by {self.reviewer} for {self.submission.title}"

    @property
    def is_submitted(self):
        return self.submitted_at is not None


class EditorialDecision(models.Model):
    """
    Append-only record of an editor's decision. The latest row by
    ``decided_at`` is the current decision for its submission.
    """
    STATUS_CHOICES = [
        ('REVISION_REQUIRED', 'Revision Required'),
        ('ACCEPTED', 'Accepted'),
        ('REJECTED', 'Rejected'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    submission = models.ForeignKey(
        'submissions.Submission',
        on_delete=models.PROTECT,
        related_name='decisions'
    )
    decided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='editorial_decisions'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    notes = models.TextField(null=True, blank=True, help_text="Notes to the author")
    decided_at = models.DateTimeField()

    class Meta:
        ordering = ['-decided_at']
        get_latest_by = 'decided_at'
        indexes = [
            models.Index(fields=['submission', 'decided_at']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=['REVISION_REQUIRED', 'ACCEPTED', 'REJECTED']),
                name='decision_status_valid',
            ),
        ]

    def __str__(self):
        return f"{self.get_status_display()} - {self.submission.title}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Editorial decisions are immutable once recorded.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Editorial decisions cannot be deleted.")
