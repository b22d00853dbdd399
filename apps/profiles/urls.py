"""
Profiles app URL configuration.

Uses DRF Routers for automatic URL generation from ViewSets.
All endpoints are mounted under /api/v1/ by the root URL config.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ActivityLogViewSet, ProfileViewSet

router = DefaultRouter()
router.register(r"profiles", ProfileViewSet, basename="profile")
router.register(r"admin/activity", ActivityLogViewSet, basename="activity")

urlpatterns = [
    path("", include(router.urls)),
]
