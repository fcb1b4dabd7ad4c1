"""
URL configuration for publications app.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import IssueViewSet, PublicIssueViewSet

router = DefaultRouter()
router.register(r'issues', IssueViewSet, basename='issue')
router.register(r'public/issues', PublicIssueViewSet, basename='public-issue')

app_name = 'publications'

urlpatterns = [
    path('', include(router.urls)),
]
