"""
Admin views over the activity log.
"""
from rest_framework import viewsets, filters
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from .models import ActivityLog
from .permissions import IsAdminRole
from .serializers import ActivityLogSerializer


@extend_schema_view(
    list=extend_schema(
        summary="List activity logs",
        description="Paginated audit trail of workflow events. Filter by action_type, resource_type or user."
    ),
    retrieve=extend_schema(summary="Retrieve a single activity log entry"),
)
class ActivityLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Admin-only endpoint for the audit trail.
    """
    serializer_class = ActivityLogSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = {
        'user': ['exact'],
        'action_type': ['exact', 'in'],
        'resource_type': ['exact', 'in'],
        'resource_id': ['exact'],
        'created_at': ['gte', 'lte'],
    }
    search_fields = ['resource_id', 'user__email']
    ordering_fields = ['created_at', 'action_type', 'resource_type']
    ordering = ['-created_at']

    def get_queryset(self):
        return ActivityLog.objects.all().select_related('user')
