"""
Views for issue management and the public issue pages.
"""
from rest_framework import viewsets, status, permissions, mixins
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from apps.common.permissions import Actor, ADMIN, IsEditorialOrReadOnly
from apps.journals.models import Journal
from apps.submissions.serializers import SubmissionSerializer
from .cache import cached_page
from .models import Issue
from .serializers import (
    IssueSerializer,
    IssueCreateSerializer,
    IssueAssignSubmissionSerializer,
    FeaturedImageSerializer,
    PublicIssueSerializer,
)
from .services import (
    create_issue,
    assign_submission_to_issue,
    publish_issue,
    update_issue_featured_image,
)
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List issues", description="Published issues plus drafts of journals you manage"),
    retrieve=extend_schema(summary="Get issue details"),
    create=extend_schema(
        summary="Create issue",
        description="Create a draft issue (admin or the journal's managing editor)",
        request=IssueCreateSerializer,
        responses=IssueSerializer,
    ),
)
class IssueViewSet(mixins.CreateModelMixin,
                   mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for issue management.

    Endpoints:
    - GET /api/v1/publications/issues/ - List issues
    - POST /api/v1/publications/issues/ - Create issue
    - POST /api/v1/publications/issues/{id}/assign_submission/ - Schedule a submission
    - POST /api/v1/publications/issues/{id}/publish/ - Publish issue
    - POST /api/v1/publications/issues/{id}/featured_image/ - Set or clear the cover image
    """
    serializer_class = IssueSerializer
    permission_classes = [IsEditorialOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['journal', 'year', 'volume']

    def get_queryset(self):
        user = self.request.user
        queryset = Issue.objects.select_related('journal')
        if user.role == ADMIN:
            return queryset
        return queryset.filter(Q(published_at__isnull=False) | Q(journal__editor=user))

    def create(self, request, *args, **kwargs):
        serializer = IssueCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        issue = create_issue(
            journal_id=data['journal'],
            volume=data['volume'],
            issue_number=data['issue_number'],
            year=data['year'],
            actor=Actor.from_user(request.user),
            title=data.get('title'),
            featured_image_url=data.get('featured_image_url'),
        )
        return Response(IssueSerializer(issue).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=IssueAssignSubmissionSerializer, responses=SubmissionSerializer)
    @action(detail=True, methods=['post'])
    def assign_submission(self, request, pk=None):
        serializer = IssueAssignSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = assign_submission_to_issue(
            pk, serializer.validated_data['submission'], Actor.from_user(request.user)
        )
        return Response(SubmissionSerializer(submission).data)

    @extend_schema(request=None, responses=IssueSerializer)
    @action(detail=True, methods=['post'])
    def publish(self, request, pk=None):
        issue = publish_issue(pk, Actor.from_user(request.user))
        return Response(IssueSerializer(issue).data)

    @extend_schema(request=FeaturedImageSerializer, responses=IssueSerializer)
    @action(detail=True, methods=['post'])
    def featured_image(self, request, pk=None):
        serializer = FeaturedImageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        issue = update_issue_featured_image(
            pk, serializer.validated_data['featured_image_url'], Actor.from_user(request.user)
        )
        return Response(IssueSerializer(issue).data)


class PublicIssueViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Anonymous, cached read access to published issues.

    Endpoints:
    - GET /api/v1/publications/public/issues/
    - GET /api/v1/publications/public/issues/{id}/
    - GET /api/v1/publications/public/issues/journal/{slug}/current/
    - GET /api/v1/publications/public/issues/journal/{slug}/archives/
    """
    serializer_class = PublicIssueSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    pagination_class = None

    def get_queryset(self):
        return Issue.objects.filter(published_at__isnull=False).select_related('journal').order_by('-published_at')

    def list(self, request, *args, **kwargs):
        payload = cached_page('/issues', lambda: self.get_serializer(self.get_queryset(), many=True).data)
        return Response(payload)

    def retrieve(self, request, *args, **kwargs):
        issue = self.get_object()
        payload = cached_page(f'/issues/{issue.id}', lambda: self.get_serializer(issue).data)
        return Response(payload)

    @action(detail=False, methods=['get'], url_path=r'journal/(?P<slug>[-\w]+)/current')
    def current(self, request, slug=None):
        journal = get_object_or_404(Journal, slug=slug, is_active=True)

        def build():
            issue = self.get_queryset().filter(journal=journal).first()
            return self.get_serializer(issue).data if issue else None

        payload = cached_page(f'/journals/{slug}/current', build)
        if payload is None:
            raise NotFound("This journal has no published issue yet.")
        return Response(payload)

    @action(detail=False, methods=['get'], url_path=r'journal/(?P<slug>[-\w]+)/archives')
    def archives(self, request, slug=None):
        journal = get_object_or_404(Journal, slug=slug, is_active=True)
        return Response(cached_page(
            f'/journals/{slug}/archives',
            lambda: self.get_serializer(self.get_queryset().filter(journal=journal), many=True).data,
        ))
