"""
URL configuration for notifications app.
"""
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.notifications.views import NotificationViewSet, EmailLogViewSet

router = SimpleRouter()
# email-logs first so its prefix is not read as a notification id
router.register(r'email-logs', EmailLogViewSet, basename='email-log')
router.register(r'', NotificationViewSet, basename='notification')

app_name = 'notifications'

urlpatterns = [
    path('', include(router.urls)),
]
