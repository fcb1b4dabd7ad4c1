"""
Serializers for reviews and editorial decisions.
"""
from rest_framework import serializers

from .models import EditorialDecision, Review


class ReviewSerializer(serializers.ModelSerializer):
    """
    Review representation. Reviewer comments to the editor are withheld
    from the submission's author.
    """
    reviewer_email = serializers.EmailField(source='reviewer.email', read_only=True)
    submission_title = serializers.CharField(source='submission.title', read_only=True)
    recommendation_display = serializers.CharField(source='get_recommendation_display', read_only=True)
    is_submitted = serializers.BooleanField(read_only=True)

    class Meta:
        model = Review
        fields = (
            'id', 'submission', 'submission_title', 'reviewer', 'reviewer_email',
            'assigned_by', 'recommendation', 'recommendation_display', 'score',
            'comments_to_author', 'comments_to_editor', 'is_submitted',
            'submitted_at', 'created_at'
        )
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        request = self.context.get('request')
        if request and instance.submission.author_id == request.user.id:
            data.pop('comments_to_editor', None)
        return data


class ReviewAssignSerializer(serializers.Serializer):
    submission = serializers.UUIDField()
    reviewer = serializers.UUIDField()


class ReviewSubmitSerializer(serializers.Serializer):
    """
    Raw review input. Recommendation and score are validated by the
    workflow itself so that scores can be clamped rather than rejected.
    """
    recommendation = serializers.CharField()
    score = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    comments_to_author = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    comments_to_editor = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EditorialDecisionSerializer(serializers.ModelSerializer):
    decided_by_email = serializers.EmailField(source='decided_by.email', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = EditorialDecision
        fields = (
            'id', 'submission', 'decided_by', 'decided_by_email',
            'status', 'status_display', 'notes', 'decided_at'
        )
        read_only_fields = fields


class EditorialDecisionCreateSerializer(serializers.Serializer):
    submission = serializers.UUIDField()
    status = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
