"""
Views for review management.
Handles reviewer assignment, review submission and editorial decisions.
"""
from rest_framework import viewsets, status, permissions, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from apps.common.permissions import Actor, ADMIN
from apps.reviews.models import Review, EditorialDecision
from apps.reviews.serializers import (
    ReviewSerializer,
    ReviewAssignSerializer,
    ReviewSubmitSerializer,
    EditorialDecisionSerializer,
    EditorialDecisionCreateSerializer,
)
from apps.reviews.services import assign_reviewer, submit_review, record_decision
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List reviews", description="Reviews visible to the current user"),
    retrieve=extend_schema(summary="Get review details"),
    create=extend_schema(
        summary="Assign reviewer",
        description="Assign a reviewer to a submission (editor or admin only)",
        request=ReviewAssignSerializer,
        responses=ReviewSerializer,
    ),
)
class ReviewViewSet(mixins.CreateModelMixin,
                    mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    viewsets.GenericViewSet):
    """
    ViewSet for reviews.

    Endpoints:
    - GET /api/v1/reviews/reviews/ - List reviews
    - POST /api/v1/reviews/reviews/ - Assign a reviewer
    - GET /api/v1/reviews/reviews/{id}/ - Get review
    - POST /api/v1/reviews/reviews/{id}/submit/ - Submit recommendation (assigned reviewer)
    - GET /api/v1/reviews/reviews/my_reviews/ - Current reviewer's assignments
    """
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['submission', 'reviewer', 'recommendation']

    def get_queryset(self):
        """
        Admins see all reviews; editors see reviews in their journals,
        reviewers their own, authors those on their submissions.
        """
        user = self.request.user
        queryset = Review.objects.select_related('submission', 'reviewer', 'assigned_by')
        if user.role == ADMIN:
            return queryset
        return queryset.filter(
            Q(reviewer=user) | Q(submission__journal__editor=user) | Q(submission__author=user)
        ).distinct()

    def create(self, request, *args, **kwargs):
        serializer = ReviewAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = assign_reviewer(
            serializer.validated_data['submission'],
            serializer.validated_data['reviewer'],
            Actor.from_user(request.user),
        )
        return Response(
            ReviewSerializer(review, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=ReviewSubmitSerializer, responses=ReviewSerializer)
    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        """Submit the reviewer's recommendation, score and comments."""
        serializer = ReviewSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        review = submit_review(
            pk,
            data['recommendation'],
            data.get('score'),
            data.get('comments_to_author'),
            data.get('comments_to_editor'),
            Actor.from_user(request.user),
        )
        return Response(ReviewSerializer(review, context=self.get_serializer_context()).data)

    @action(detail=False, methods=['get'])
    def my_reviews(self, request):
        queryset = Review.objects.filter(reviewer=request.user).select_related('submission')
        pending = request.query_params.get('pending')
        if pending is not None:
            queryset = queryset.filter(submitted_at__isnull=pending.lower() in ('1', 'true'))
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)


@extend_schema_view(
    list=extend_schema(
        summary="List editorial decisions",
        description="List editorial decisions visible to the current user"
    ),
    retrieve=extend_schema(summary="Get editorial decision details"),
    create=extend_schema(
        summary="Record editorial decision",
        description="Record a decision on a submission (editor or admin only)",
        request=EditorialDecisionCreateSerializer,
        responses=EditorialDecisionSerializer,
    ),
)
class EditorialDecisionViewSet(mixins.CreateModelMixin,
                               mixins.ListModelMixin,
                               mixins.RetrieveModelMixin,
                               viewsets.GenericViewSet):
    """
    ViewSet for editorial decisions. Decisions are append-only: there is no
    update or delete endpoint.

    Endpoints:
    - GET /api/v1/reviews/decisions/ - List decisions
    - POST /api/v1/reviews/decisions/ - Record decision
    - GET /api/v1/reviews/decisions/{id}/ - Get decision
    """
    serializer_class = EditorialDecisionSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['submission', 'status']

    def get_queryset(self):
        user = self.request.user
        queryset = EditorialDecision.objects.select_related('submission', 'decided_by')
        if user.role == ADMIN:
            return queryset
        return queryset.filter(
            Q(submission__author=user) | Q(submission__journal__editor=user) | Q(decided_by=user)
        ).distinct()

    def create(self, request, *args, **kwargs):
        serializer = EditorialDecisionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        decision = record_decision(
            data['submission'],
            data['status'],
            data.get('notes'),
            Actor.from_user(request.user),
        )
        return Response(EditorialDecisionSerializer(decision).data, status=status.HTTP_201_CREATED)
