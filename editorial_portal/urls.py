"""
URL configuration for editorial_portal project.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API endpoints
    path('api/v1/', include('apps.users.urls')),
    path('api/v1/journals/', include('apps.journals.urls')),
    path('api/v1/submissions/', include('apps.submissions.urls')),
    path('api/v1/reviews/', include('apps.reviews.urls')),
    path('api/v1/publications/', include('apps.publications.urls')),
    path('api/v1/notifications/', include('apps.notifications.urls')),
    path('api/v1/', include('apps.common.urls')),

    # DRF Browsable API (in development)
    path('api-auth/', include('rest_framework.urls')),
]
