from rest_framework import serializers
from .models import ActivityLog


class ActivityLogSerializer(serializers.ModelSerializer):
    """
    Serializer for ActivityLog entries, for admin monitoring.
    """
    user_email = serializers.CharField(source='user.email', read_only=True, allow_null=True)
    action_type_display = serializers.CharField(source='get_action_type_display', read_only=True)
    resource_type_display = serializers.CharField(source='get_resource_type_display', read_only=True)

    class Meta:
        model = ActivityLog
        fields = [
            'id',
            'user',
            'user_email',
            'actor_type',
            'action_type',
            'action_type_display',
            'resource_type',
            'resource_type_display',
            'resource_id',
            'metadata',
            'ip_address',
            'created_at',
        ]
        read_only_fields = fields
