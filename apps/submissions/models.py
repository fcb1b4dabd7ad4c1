"""
Submission models for the Editorial Portal.
Handles manuscripts and their ordered contributor lists.
"""
import uuid
from django.db import models
from django.conf import settings


class Submission(models.Model):
    """
    Manuscript submission moving through the editorial lifecycle.
    """
    STATUS_DRAFT = 'DRAFT'
    STATUS_SUBMITTED = 'SUBMITTED'
    STATUS_UNDER_REVIEW = 'UNDER_REVIEW'
    STATUS_REVISION_REQUIRED = 'REVISION_REQUIRED'
    STATUS_ACCEPTED = 'ACCEPTED'
    STATUS_REJECTED = 'REJECTED'
    STATUS_PUBLISHED = 'PUBLISHED'

    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_SUBMITTED, 'Submitted'),
        (STATUS_UNDER_REVIEW, 'Under Review'),
        (STATUS_REVISION_REQUIRED, 'Revision Required'),
        (STATUS_ACCEPTED, 'Accepted'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_PUBLISHED, 'Published'),
    ]

    # Values an editor may set directly; DRAFT is never re-entered.
    EDITABLE_STATUSES = (
        STATUS_SUBMITTED,
        STATUS_UNDER_REVIEW,
        STATUS_REVISION_REQUIRED,
        STATUS_ACCEPTED,
        STATUS_REJECTED,
        STATUS_PUBLISHED,
    )

    # An issue only accepts submissions in these states.
    ISSUE_ASSIGNABLE_STATUSES = (STATUS_ACCEPTED, STATUS_PUBLISHED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    journal = models.ForeignKey(
        'journals.Journal',
        on_delete=models.PROTECT,
        related_name='submissions'
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='submissions',
        help_text="Submitting author"
    )
    title = models.CharField(max_length=500)
    abstract = models.TextField(help_text="Manuscript abstract")
    keywords = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered, de-duplicated keyword list"
    )
    manuscript_url = models.CharField(
        max_length=1000,
        blank=True,
        null=True,
        help_text="Location of the uploaded manuscript file"
    )
    doi = models.CharField(max_length=255, blank=True)

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT
    )
    issue = models.ForeignKey(
        'publications.Issue',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='submissions',
        help_text="Issue this submission is scheduled in or published with"
    )

    submitted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['journal', 'status']),
            models.Index(fields=['author', 'status']),
            models.Index(fields=['issue', 'status']),
            models.Index(fields=['submitted_at']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=[
                    'DRAFT', 'SUBMITTED', 'UNDER_REVIEW', 'REVISION_REQUIRED',
                    'ACCEPTED', 'REJECTED', 'PUBLISHED',
                ]),
                name='submission_status_valid',
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def current_decision(self):
        """Latest editorial decision, or None."""
        return self.decisions.order_by('-decided_at').first()


class Contributor(models.Model):
    """
    Named contributor on a submission, ordered by ``sequence``.
    """
    ROLE_CHOICES = [
        ('AUTHOR', 'Author'),
        ('TRANSLATOR', 'Translator'),
        ('EDITOR', 'Volume Editor'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    submission = models.ForeignKey(
        Submission,
        on_delete=models.CASCADE,
        related_name='contributors'
    )
    given_name = models.CharField(max_length=150)
    family_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(blank=True)
    affiliation = models.CharField(max_length=255, blank=True)
    orcid = models.CharField(max_length=19, blank=True, help_text="ORCID iD (0000-0000-0000-0000)")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='AUTHOR')
    is_primary = models.BooleanField(default=False)
    sequence = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['submission', 'sequence']
        indexes = [
            models.Index(fields=['submission', 'sequence']),
        ]

    def __str__(self):
        return f"{self.given_name} {self.family_name}".strip()
