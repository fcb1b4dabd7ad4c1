"""
Publication models for the Editorial Portal.
"""
import uuid
from django.db import models


class Issue(models.Model):
    """
    Journal issue grouping accepted submissions. A draft until
    ``published_at`` is set; publication happens once.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    journal = models.ForeignKey(
        'journals.Journal',
        on_delete=models.CASCADE,
        related_name='issues'
    )
    volume = models.PositiveIntegerField()
    issue_number = models.PositiveIntegerField()
    year = models.PositiveIntegerField()
    title = models.CharField(max_length=255, null=True, blank=True)
    featured_image_url = models.CharField(
        max_length=1000,
        null=True,
        blank=True,
        help_text="Root-relative path or http(s) URL of the cover image"
    )

    published_at = models.DateTimeField(null=True, blank=True, help_text="Null while the issue is a draft")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-year', '-volume', '-issue_number']
        indexes = [
            models.Index(fields=['journal', 'published_at']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['journal', 'volume', 'issue_number', 'year'],
                name='unique_issue_per_journal',
            ),
        ]

    def __str__(self):
        label = f"Vol. {self.volume} No. {self.issue_number} ({self.year})"
        return f"{label}: {self.title}" if self.title else label

    @property
    def is_published(self):
        return self.published_at is not None
