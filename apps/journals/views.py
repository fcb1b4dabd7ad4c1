"""
ViewSets for Journal management.
"""

from rest_framework import viewsets, permissions, filters
from django.db.models import ProtectedError
from django_filters.rest_framework import DjangoFilterBackend

from apps.common.exceptions import Conflict
from apps.common.permissions import ADMIN
from .models import Journal
from .serializers import JournalSerializer, JournalListSerializer


class JournalPermissions(permissions.BasePermission):
    """
    - Any authenticated user can view journals
    - Only admins create journals
    - Admins and the journal's managing editor can edit it
    """

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        if view.action == 'create':
            return request.user.role == ADMIN
        return True

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        if request.user.role == ADMIN:
            return True
        return obj.editor_id == request.user.id and view.action != 'destroy'


class JournalViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Journal management.
    """
    queryset = Journal.objects.select_related('editor')
    permission_classes = [JournalPermissions]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['title', 'slug', 'description']
    filterset_fields = ['is_active', 'is_accepting_submissions', 'editor']
    ordering_fields = ['title', 'created_at']
    ordering = ['title']

    def get_serializer_class(self):
        if self.action == 'list':
            return JournalListSerializer
        return JournalSerializer

    def perform_destroy(self, instance):
        # Submissions and their decision history are never deleted with the journal.
        try:
            instance.delete()
        except ProtectedError:
            raise Conflict("This journal has submissions and cannot be deleted; deactivate it instead.")
