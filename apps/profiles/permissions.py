"""Access rules for the profile directory."""

from rest_framework.permissions import BasePermission


class IsAdminOrPublicAction(BasePermission):
    """
    Anyone may browse profiles and submit one; everything else is staff-only.

    Expects the view to expose DRF's ``action`` attribute (ViewSets do).
    """

    public_actions = frozenset(["list", "retrieve", "seo", "create"])

    def has_permission(self, request, view):
        if getattr(view, "action", None) in self.public_actions:
            return True
        return bool(request.user and request.user.is_staff)
