"""
Serializers for Journal management.
"""

from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import Journal

User = get_user_model()


class JournalSerializer(serializers.ModelSerializer):
    """Journal serializer; the editor must hold an editorial role."""

    editor_email = serializers.EmailField(source='editor.email', read_only=True)
    submission_count = serializers.SerializerMethodField()

    class Meta:
        model = Journal
        fields = (
            'id', 'title', 'slug', 'publisher', 'description',
            'issn_print', 'issn_online', 'contact_email',
            'editor', 'editor_email', 'is_active', 'is_accepting_submissions',
            'submission_count', 'created_at', 'updated_at'
        )
        read_only_fields = ('id', 'created_at', 'updated_at')

    def get_submission_count(self, obj):
        return obj.submissions.count()

    def validate_editor(self, value):
        if value.role not in (User.ROLE_EDITOR, User.ROLE_ADMIN):
            raise serializers.ValidationError("The managing editor must hold the EDITOR or ADMIN role.")
        return value


class JournalListSerializer(serializers.ModelSerializer):

    class Meta:
        model = Journal
        fields = ('id', 'title', 'slug', 'publisher', 'editor', 'is_active', 'is_accepting_submissions')
