"""
ViewSets for the profile directory and the admin activity log.

Key patterns:
  - Anonymous visitors only ever see Verified profiles; staff see all
  - Profiles are read by slug and edited/deleted by id
  - All writes go through ``apps.profiles.storage`` (via the serializer)
  - Admin dashboard aggregates are computed server-side
"""

import csv

from django.http import HttpResponse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from . import storage
from .filters import ActivityLogFilter, ProfileFilter
from .models import ActivityLog, Profile
from .moderation import InvalidTransition, transition
from .pagination import ActivityPagination, page_envelope
from .permissions import IsAdminOrPublicAction
from .seo import build_profile_seo
from .serializers import (
    ActivityLogSerializer,
    ProfileListSerializer,
    ProfileSerializer,
    ProfileStatsSerializer,
    SubmissionAnalyticsSerializer,
)

EXPORT_FIELDS = [
    "id",
    "name",
    "email",
    "phone",
    "address",
    "age",
    "profession",
    "experience",
    "skills",
    "education",
    "work_experience",
    "achievements",
    "profile_photo",
    "slug",
    "status",
    "created_at",
]

# Leading characters a spreadsheet would evaluate as a formula.
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def csv_cell(value):
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


# ---------------------------------------------------------------------------
# Profile ViewSet
# ---------------------------------------------------------------------------
class ProfileViewSet(viewsets.ModelViewSet):
    """
    Public directory plus admin moderation.

    list      → GET    /api/v1/profiles/            (public; filterable)
    create    → POST   /api/v1/profiles/            (public; multipart)
    read      → GET    /api/v1/profiles/{slug}/     (public)
    seo       → GET    /api/v1/profiles/{slug}/seo/ (public)
    update    → PUT    /api/v1/profiles/{id}/       (admin; partial)
    update    → PATCH  /api/v1/profiles/{id}/       (admin)
    delete    → DELETE /api/v1/profiles/{id}/       (admin)
    verify    → POST   /api/v1/profiles/{id}/verify/
    reject    → POST   /api/v1/profiles/{id}/reject/
    stats     → GET    /api/v1/profiles/stats/
    analytics → GET    /api/v1/profiles/analytics/
    export    → GET    /api/v1/profiles/export/     (CSV)

    Query parameters (list / export):
      ?search=ali            — name substring, case-insensitive
      ?profession=engineer   — profession substring
      ?status=Pending        — moderation status (admin)
      ?page=1&limit=12       — pagination
    """

    permission_classes = [IsAdminOrPublicAction]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProfileFilter
    lookup_url_kwarg = "key"
    lookup_value_regex = "[^/]+"

    # Slug lookups for reads, id lookups for writes.
    slug_actions = frozenset(["retrieve", "seo"])

    def get_queryset(self):
        return storage.visible_profiles(self.request.user).order_by("-created_at")

    def get_serializer_class(self):
        if self.action == "list":
            return ProfileListSerializer
        return ProfileSerializer

    def get_object(self):
        key = self.kwargs[self.lookup_url_kwarg]
        if self.action in self.slug_actions:
            obj = self.get_queryset().filter(slug=key).first()
        else:
            obj = storage.get_profile(key)
        if obj is None:
            raise NotFound("Profile not found.")
        self.check_object_permissions(self.request, obj)
        return obj

    def list(self, request, *args, **kwargs):
        """Paging and filtering come from ``storage.list_profiles``."""
        params = request.query_params
        result = storage.list_profiles(
            page=params.get("page"),
            limit=params.get("limit"),
            search=params.get("search"),
            status=params.get("status"),
            profession=params.get("profession"),
            queryset=self.get_queryset(),
        )
        serializer = self.get_serializer(result.profiles, many=True)
        return Response(
            page_envelope("profiles", serializer.data, result.total, result.page, result.limit)
        )

    def update(self, request, *args, **kwargs):
        """PUT and PATCH both accept any subset of fields."""
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        profile = self.get_object()
        storage.delete_profile(profile.pk, actor=request.user)
        return Response(
            {"message": "Profile deleted successfully."},
            status=status.HTTP_200_OK,
        )

    # ----- Public extras -----
    @action(detail=True, methods=["get"], url_path="seo")
    def seo(self, request, key=None):
        """GET /api/v1/profiles/{slug}/seo/ — head metadata for the profile page."""
        return Response(build_profile_seo(self.get_object(), request=request))

    # ----- Moderation -----
    def _moderate(self, request, new_status):
        profile = self.get_object()
        try:
            transition(profile, new_status, actor=request.user)
        except InvalidTransition as exc:
            raise ValidationError({"status": [str(exc)]})
        serializer = ProfileSerializer(profile, context=self.get_serializer_context())
        return Response(serializer.data)

    @action(detail=True, methods=["post"])
    def verify(self, request, key=None):
        return self._moderate(request, Profile.Status.VERIFIED)

    @action(detail=True, methods=["post"])
    def reject(self, request, key=None):
        return self._moderate(request, Profile.Status.REJECTED)

    # ----- Admin dashboard -----
    @action(detail=False, methods=["get"])
    def stats(self, request):
        """GET /api/v1/profiles/stats/ — total and per-status counts."""
        return Response(ProfileStatsSerializer(storage.profile_stats()).data)

    @action(detail=False, methods=["get"])
    def analytics(self, request):
        """GET /api/v1/profiles/analytics/ — submissions today / 7 days / 30 days."""
        return Response(SubmissionAnalyticsSerializer(storage.submission_analytics()).data)

    @action(detail=False, methods=["get"])
    def export(self, request):
        """GET /api/v1/profiles/export/ — CSV of every profile matching the filters."""
        queryset = self.filter_queryset(self.get_queryset())
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = 'attachment; filename="profiles.csv"'
        writer = csv.writer(response)
        writer.writerow(EXPORT_FIELDS)
        for profile in queryset:
            writer.writerow([csv_cell(getattr(profile, field)) for field in EXPORT_FIELDS])
        return response


# ---------------------------------------------------------------------------
# Activity log ViewSet
# ---------------------------------------------------------------------------
class ActivityLogViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    GET /api/v1/admin/activity/ — newest first.

    ?action=verified    — filter by action
    ?profile=<uuid>     — entries for one profile
    """

    serializer_class = ActivityLogSerializer
    permission_classes = [IsAdminUser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ActivityLogFilter
    pagination_class = ActivityPagination

    def get_queryset(self):
        return ActivityLog.objects.select_related("profile", "actor").order_by("-timestamp")
