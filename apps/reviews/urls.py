"""
URL configuration for reviews app.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from apps.reviews.views import ReviewViewSet, EditorialDecisionViewSet

app_name = 'reviews'

router = DefaultRouter()
router.register(r'reviews', ReviewViewSet, basename='review')
router.register(r'decisions', EditorialDecisionViewSet, basename='decision')

urlpatterns = [
    path('', include(router.urls)),
]
