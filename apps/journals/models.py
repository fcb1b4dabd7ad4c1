"""
Journal models for the Editorial Portal.
"""
import uuid
from django.db import models
from django.conf import settings


class Journal(models.Model):
    """
    Journal model. Each journal has exactly one managing editor and owns its
    submissions and issues.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255, help_text="Full journal title")
    slug = models.SlugField(
        max_length=100,
        unique=True,
        help_text="URL slug used by the public journal pages"
    )
    publisher = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    issn_print = models.CharField(max_length=9, blank=True, help_text="Print ISSN (e.g., 1234-5678)")
    issn_online = models.CharField(max_length=9, blank=True, help_text="Online ISSN (e.g., 1234-5679)")
    contact_email = models.EmailField(blank=True)

    editor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='managed_journals',
        help_text="Managing editor; must hold the EDITOR or ADMIN role"
    )

    is_active = models.BooleanField(default=True)
    is_accepting_submissions = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['title']
        indexes = [
            models.Index(fields=['is_active']),
            models.Index(fields=['editor']),
        ]

    def __str__(self):
        return self.title
