"""
Authentication and user management views.
"""

from rest_framework import status, permissions, generics, filters
from rest_framework.decorators import api_view, permission_classes, action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from rest_framework.mixins import ListModelMixin, RetrieveModelMixin, UpdateModelMixin
from rest_framework_simplejwt.views import TokenObtainPairView
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view

from apps.common.permissions import Actor, EDITORIAL_ROLES, IsAdminRole
from .models import CustomUser
from .serializers import (
    CustomTokenObtainPairSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    RoleChangeSerializer,
)
from .services import change_user_role
import logging

logger = logging.getLogger(__name__)


class CustomTokenObtainPairView(TokenObtainPairView):
    """JWT login returning the user's role alongside the tokens."""

    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == 200:
            logger.info(f"Successful login for user: {request.data.get('email')}")
        return response


class UserRegistrationView(generics.CreateAPIView):
    """Self-service registration; new accounts hold the AUTHOR role."""

    serializer_class = UserRegistrationSerializer
    permission_classes = [permissions.AllowAny]

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(f"Registered new user {user.email}")


@extend_schema_view(
    list=extend_schema(summary="List users", description="Editors and admins see every user; others only themselves."),
    retrieve=extend_schema(summary="Get user"),
    update=extend_schema(summary="Update user"),
    partial_update=extend_schema(summary="Partially update user"),
)
class UserViewSet(ListModelMixin, RetrieveModelMixin, UpdateModelMixin, GenericViewSet):
    """
    ViewSet for user management.

    Endpoints:
    - GET /api/v1/users/ - List users
    - GET /api/v1/users/{id}/ - Get user
    - PATCH /api/v1/users/{id}/ - Update own name fields
    - POST /api/v1/users/{id}/change_role/ - Change role (admin only)
    """

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['email', 'first_name', 'last_name']
    filterset_fields = ['role', 'is_active']
    ordering_fields = ['date_joined', 'email']
    ordering = ['-date_joined']

    def get_queryset(self):
        user = self.request.user
        if user.role in EDITORIAL_ROLES:
            return CustomUser.objects.all()
        return CustomUser.objects.filter(id=user.id)

    def perform_update(self, serializer):
        if serializer.instance.id != self.request.user.id and self.request.user.role != CustomUser.ROLE_ADMIN:
            self.permission_denied(self.request, message="You can only update your own account.")
        serializer.save()

    @extend_schema(request=RoleChangeSerializer, responses=UserSerializer)
    @action(detail=True, methods=['post'], permission_classes=[IsAdminRole])
    def change_role(self, request, pk=None):
        serializer = RoleChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = change_user_role(pk, serializer.validated_data['role'], Actor.from_user(request.user))
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def current_user(request):
    """Get current authenticated user information."""
    serializer = UserSerializer(request.user)
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    """Health check endpoint."""
    return Response({
        'status': 'healthy',
        'service': 'editorial-portal-api',
        'version': '1.0.0'
    })
