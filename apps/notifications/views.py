"""
API views for in-app notifications and email logs.
"""
from rest_framework import viewsets, mixins, filters
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.common.permissions import Actor, IsAdminRole
from apps.notifications.models import Notification, EmailLog
from apps.notifications.serializers import NotificationSerializer, EmailLogSerializer
from apps.notifications.services import (
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
    unread_count,
)


@extend_schema_view(
    list=extend_schema(
        summary="List my notifications",
        description="Newest notifications of the current user",
        parameters=[OpenApiParameter('unread', OpenApiTypes.BOOL, description="Only unread notifications")],
    ),
    retrieve=extend_schema(summary="Get notification"),
)
class NotificationViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """
    ViewSet for the current user's notifications.

    Endpoints:
    - GET /api/v1/notifications/ - Latest notifications
    - GET /api/v1/notifications/{id}/ - Get notification
    - POST /api/v1/notifications/{id}/mark_read/ - Mark one read
    - POST /api/v1/notifications/mark_all_read/ - Mark all read
    - GET /api/v1/notifications/unread_count/ - Number of unread notifications
    """
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)

    def list(self, request, *args, **kwargs):
        unread = request.query_params.get('unread', '').lower() in ('1', 'true')
        notifications = list_notifications(Actor.from_user(request.user), unread_only=unread)
        return Response(self.get_serializer(notifications, many=True).data)

    @extend_schema(request=None, responses=NotificationSerializer)
    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        notification = mark_notification_read(pk, Actor.from_user(request.user))
        return Response(self.get_serializer(notification).data)

    @extend_schema(request=None)
    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        updated = mark_all_notifications_read(Actor.from_user(request.user))
        return Response({'updated': updated})

    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        return Response({'unread_count': unread_count(Actor.from_user(request.user))})


@extend_schema_view(
    list=extend_schema(summary="List email logs", description="Transactional email attempts (admin only)"),
    retrieve=extend_schema(summary="Get email log"),
)
class EmailLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for viewing email logs.

    Endpoints:
    - GET /api/v1/notifications/email-logs/ - List email attempts
    - GET /api/v1/notifications/email-logs/{id}/ - Get specific email log
    - GET /api/v1/notifications/email-logs/failed/ - Failed deliveries
    """
    serializer_class = EmailLogSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'template_type', 'user']
    search_fields = ['subject', 'recipient']
    ordering_fields = ['created_at', 'status']
    ordering = ['-created_at']

    def get_queryset(self):
        return EmailLog.objects.select_related('user')

    @action(detail=False, methods=['get'])
    def failed(self, request):
        """Get failed email deliveries."""
        logs = self.filter_queryset(self.get_queryset()).filter(status='FAILED')

        page = self.paginate_queryset(logs)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(logs, many=True)
        return Response(serializer.data)
