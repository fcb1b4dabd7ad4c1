"""
Serializers for issues.
"""
from rest_framework import serializers

from apps.submissions.models import Submission
from .models import Issue


class IssueSerializer(serializers.ModelSerializer):
    journal_title = serializers.CharField(source='journal.title', read_only=True)
    journal_slug = serializers.CharField(source='journal.slug', read_only=True)
    is_published = serializers.BooleanField(read_only=True)
    submission_count = serializers.SerializerMethodField()

    class Meta:
        model = Issue
        fields = (
            'id', 'journal', 'journal_title', 'journal_slug', 'volume', 'issue_number',
            'year', 'title', 'featured_image_url', 'is_published', 'published_at',
            'submission_count', 'created_at', 'updated_at'
        )
        read_only_fields = fields

    def get_submission_count(self, obj):
        return obj.submissions.count()


class IssueCreateSerializer(serializers.Serializer):
    """Numbers arrive as raw values; the workflow parses and validates them."""
    journal = serializers.UUIDField()
    volume = serializers.CharField()
    issue_number = serializers.CharField()
    year = serializers.CharField()
    title = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    featured_image_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class IssueAssignSubmissionSerializer(serializers.Serializer):
    submission = serializers.UUIDField()


class FeaturedImageSerializer(serializers.Serializer):
    featured_image_url = serializers.CharField(allow_blank=True, allow_null=True)


class PublishedArticleSerializer(serializers.ModelSerializer):

    class Meta:
        model = Submission
        fields = ('id', 'title', 'abstract', 'keywords', 'doi')


class PublicIssueSerializer(serializers.ModelSerializer):
    """Public view of a published issue and its articles."""
    journal_slug = serializers.CharField(source='journal.slug', read_only=True)
    articles = serializers.SerializerMethodField()

    class Meta:
        model = Issue
        fields = (
            'id', 'journal', 'journal_slug', 'volume', 'issue_number', 'year',
            'title', 'featured_image_url', 'published_at', 'articles'
        )

    def get_articles(self, obj):
        published = obj.submissions.filter(status=Submission.STATUS_PUBLISHED).order_by('title')
        return PublishedArticleSerializer(published, many=True).data
