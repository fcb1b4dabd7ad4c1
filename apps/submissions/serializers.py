"""
Serializers for submissions and their contributors.
"""
from rest_framework import serializers

from .models import Contributor, Submission


class ContributorSerializer(serializers.ModelSerializer):

    class Meta:
        model = Contributor
        fields = (
            'id', 'given_name', 'family_name', 'email', 'affiliation',
            'orcid', 'role', 'is_primary', 'sequence'
        )
        read_only_fields = ('id', 'sequence')


class SubmissionSerializer(serializers.ModelSerializer):
    """Full submission representation with contributors and latest decision."""

    contributors = ContributorSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    author_email = serializers.EmailField(source='author.email', read_only=True)
    journal_title = serializers.CharField(source='journal.title', read_only=True)
    current_decision = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = (
            'id', 'journal', 'journal_title', 'author', 'author_email',
            'title', 'abstract', 'keywords', 'manuscript_url', 'doi',
            'status', 'status_display', 'issue', 'contributors',
            'current_decision', 'submitted_at', 'created_at', 'updated_at'
        )
        read_only_fields = fields

    def get_current_decision(self, obj):
        decision = obj.current_decision
        if decision is None:
            return None
        return {
            'status': decision.status,
            'notes': decision.notes,
            'decided_at': decision.decided_at,
        }


class SubmissionListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    journal_title = serializers.CharField(source='journal.title', read_only=True)

    class Meta:
        model = Submission
        fields = (
            'id', 'journal', 'journal_title', 'author', 'title',
            'status', 'status_display', 'issue', 'submitted_at'
        )


class SubmissionCreateSerializer(serializers.Serializer):
    """Input for a new submission; keywords may be a list or a comma separated string."""

    journal = serializers.UUIDField()
    title = serializers.CharField(max_length=500)
    abstract = serializers.CharField()
    keywords = serializers.JSONField(required=False, default=list)
    manuscript_url = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    contributors = ContributorSerializer(many=True, required=False, default=list)

    def validate_keywords(self, value):
        if not isinstance(value, (list, str)):
            raise serializers.ValidationError("Keywords must be a list or a comma separated string.")
        return value


class SubmissionStatusUpdateSerializer(serializers.Serializer):
    """Any status but DRAFT; no transition table applies to editor overrides."""

    status = serializers.ChoiceField(choices=Submission.EDITABLE_STATUSES)
