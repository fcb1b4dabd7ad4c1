from django.contrib import admin
from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Read-only admin for the audit trail."""
    list_display = ['user', 'action_type', 'resource_type', 'resource_id', 'actor_type', 'created_at']
    list_filter = ['action_type', 'resource_type', 'actor_type', 'created_at']
    search_fields = ['user__email', 'resource_id']
    readonly_fields = [
        'id', 'user', 'actor_type', 'action_type', 'resource_type',
        'resource_id', 'metadata', 'ip_address', 'user_agent',
        'session_id', 'created_at'
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser
