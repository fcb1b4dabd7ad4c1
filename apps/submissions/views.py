"""
Views for submission management.
"""
from rest_framework import viewsets, status, permissions, filters, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from apps.common.permissions import Actor, ADMIN
from .models import Submission
from .serializers import (
    SubmissionSerializer,
    SubmissionListSerializer,
    SubmissionCreateSerializer,
    SubmissionStatusUpdateSerializer,
)
from .services import create_submission, set_status
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List submissions", description="Submissions visible to the current user"),
    retrieve=extend_schema(summary="Get submission details"),
    create=extend_schema(
        summary="Create submission",
        request=SubmissionCreateSerializer,
        responses=SubmissionSerializer,
    ),
)
class SubmissionViewSet(mixins.CreateModelMixin,
                        mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        viewsets.GenericViewSet):
    """
    ViewSet for submissions.

    Endpoints:
    - GET /api/v1/submissions/ - List visible submissions
    - POST /api/v1/submissions/ - Create submission (admin, editor, author)
    - GET /api/v1/submissions/{id}/ - Get submission
    - POST /api/v1/submissions/{id}/set_status/ - Editorial status override
    """
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['title', 'abstract', 'author__email']
    filterset_fields = ['status', 'journal', 'issue']
    ordering_fields = ['title', 'created_at', 'submitted_at', 'status']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return SubmissionListSerializer
        if self.action == 'create':
            return SubmissionCreateSerializer
        if self.action == 'set_status':
            return SubmissionStatusUpdateSerializer
        return SubmissionSerializer

    def get_queryset(self):
        """
        Admins see everything; everyone else sees their own submissions,
        those they review and those in journals they manage.
        """
        user = self.request.user
        queryset = Submission.objects.select_related('journal', 'author', 'issue').prefetch_related('contributors')

        if user.role == ADMIN:
            return queryset

        return queryset.filter(
            Q(author=user) | Q(reviews__reviewer=user) | Q(journal__editor=user)
        ).distinct()

    def create(self, request, *args, **kwargs):
        serializer = SubmissionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        submission = create_submission(
            journal_id=data['journal'],
            title=data['title'],
            abstract=data['abstract'],
            actor=Actor.from_user(request.user),
            keywords=data.get('keywords'),
            manuscript_url=data.get('manuscript_url'),
            contributors=data.get('contributors', []),
        )
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=SubmissionStatusUpdateSerializer, responses=SubmissionSerializer)
    @action(detail=True, methods=['post'])
    def set_status(self, request, pk=None):
        """Editorial override of the submission status."""
        serializer = SubmissionStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = set_status(pk, serializer.validated_data['status'], Actor.from_user(request.user))
        return Response(SubmissionSerializer(submission).data)
