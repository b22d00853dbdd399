"""
django-filter FilterSets for the profile listing and the activity log.

Profile listing supports:
  - search (case-insensitive substring of the name only)
  - profession (case-insensitive substring)
  - status (exact moderation status; only meaningful for admins, since
    anonymous visitors never see anything but Verified profiles)
"""

from django_filters import rest_framework as filters

from .models import ActivityLog, Profile


class ProfileFilter(filters.FilterSet):
    """
    Filterable fields exposed as query parameters on GET /profiles/.

    Examples:
        ?search=ali
        ?profession=engineer
        ?status=Pending
    """

    search = filters.CharFilter(field_name="name", lookup_expr="icontains")
    profession = filters.CharFilter(field_name="profession", lookup_expr="icontains")
    status = filters.ChoiceFilter(choices=Profile.Status.choices)

    class Meta:
        model = Profile
        fields = ["search", "profession", "status"]


class ActivityLogFilter(filters.FilterSet):
    """?action=verified, ?profile=<uuid>"""

    action = filters.ChoiceFilter(choices=ActivityLog.Action.choices)
    profile = filters.UUIDFilter(field_name="profile__id")

    class Meta:
        model = ActivityLog
        fields = ["action", "profile"]
