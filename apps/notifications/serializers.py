"""
Serializers for in-app notifications and email logs.
"""
from rest_framework import serializers
from apps.notifications.models import Notification, EmailLog


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for a user's in-app notification."""

    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'type', 'type_display', 'title', 'message', 'link', 'read', 'created_at']
        read_only_fields = fields


class EmailLogSerializer(serializers.ModelSerializer):
    """Serializer for email log records."""

    user_email = serializers.CharField(source='user.email', read_only=True)
    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )

    class Meta:
        model = EmailLog
        fields = [
            'id',
            'recipient',
            'user_email',
            'template_type',
            'subject',
            'status',
            'status_display',
            'sent_at',
            'retry_count',
            'error_message',
            'created_at',
        ]
        read_only_fields = fields
