"""
URL configuration for submissions app.
"""
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import SubmissionViewSet

router = SimpleRouter()
router.register(r'', SubmissionViewSet, basename='submission')

app_name = 'submissions'

urlpatterns = [
    path('', include(router.urls)),
]
