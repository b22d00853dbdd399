"""
Profile store — the query contract behind every profile endpoint.

All reads and writes of ``Profile`` rows go through these functions so the
views, serializers and Django admin share one set of rules:

  - new profiles get a unique slug and always start Pending
  - email is unique (case-insensitive)
  - status changes go through ``apps.profiles.moderation``
  - creates, edits and deletes are written to the ActivityLog

The slug probe and the insert are not atomic with respect to other
requests; a racing duplicate is caught by the unique constraint on insert.
"""

import logging
from datetime import timedelta
from typing import NamedTuple

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from . import moderation
from .emails import send_submission_received_email
from .filters import ProfileFilter
from .models import ActivityLog, Profile
from .pagination import clean_page_params, page_count
from .slugs import slugify_name, unique_slug

logger = logging.getLogger(__name__)

# Path segments routed to list-level endpoints; a profile may never own them.
RESERVED_SLUGS = frozenset(["stats", "analytics", "export"])

# Never accepted from callers on create/update.
PROTECTED_FIELDS = frozenset(["id", "slug", "created_at", "updated_at"])


class DuplicateEmailError(Exception):
    """Raised when another profile already uses the email address."""

    message = "A profile with this email already exists."

    def __init__(self, email):
        self.email = email
        super().__init__(self.message)


class ProfilePage(NamedTuple):
    profiles: list
    total: int
    page: int
    limit: int

    @property
    def total_pages(self):
        return page_count(self.total, self.limit)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_profile(profile_id):
    """Return the profile with primary key ``profile_id`` or ``None``."""
    try:
        return Profile.objects.get(pk=profile_id)
    except (Profile.DoesNotExist, ValidationError, ValueError):
        return None


def get_profile_by_slug(slug):
    return Profile.objects.filter(slug=slug).first()


def get_profile_by_email(email):
    if not email:
        return None
    return Profile.objects.filter(email__iexact=email.strip()).first()


def visible_profiles(user=None):
    """Queryset a caller may read: everything for staff, Verified otherwise."""
    qs = Profile.objects.all()
    if user is not None and user.is_authenticated and user.is_staff:
        return qs
    return qs.filter(status=Profile.Status.VERIFIED)


def list_profiles(page=1, limit=None, search=None, status=None, profession=None, queryset=None):
    """
    Return one page of profiles, newest first, plus the total match count.

    ``search`` matches a case-insensitive substring of the name only.
    """
    page, limit = clean_page_params(page, limit)
    params = {"search": search, "status": status, "profession": profession}
    params = {k: v for k, v in params.items() if v}
    base = queryset if queryset is not None else Profile.objects.all()
    qs = ProfileFilter(params, queryset=base).qs.order_by("-created_at")

    total = qs.count()
    offset = (page - 1) * limit
    return ProfilePage(list(qs[offset:offset + limit]), total, page, limit)


def profile_stats():
    """Total profile count plus a count per moderation status."""
    counts = dict(
        Profile.objects.values_list("status")
        .annotate(count=Count("id"))
        .values_list("status", "count")
    )
    by_status = {s.value: counts.get(s.value, 0) for s in Profile.Status}
    return {"total": sum(by_status.values()), "by_status": by_status}


def submission_analytics(now=None):
    """Profiles created today, in the last 7 days and in the last 30 days."""
    now = now or timezone.now()
    start_of_day = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    qs = Profile.objects.filter(created_at__lte=now)
    return {
        "today": qs.filter(created_at__gte=start_of_day).count(),
        "week": qs.filter(created_at__gte=now - timedelta(days=7)).count(),
        "month": qs.filter(created_at__gte=now - timedelta(days=30)).count(),
    }


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def _slug_taken(exclude_pk=None):
    def exists(candidate):
        if candidate in RESERVED_SLUGS:
            return True
        qs = Profile.objects.filter(slug=candidate)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        return qs.exists()
    return exists


def assign_slug(name, exclude_pk=None):
    """Unique slug for ``name``, ignoring the profile ``exclude_pk`` itself."""
    return unique_slug(slugify_name(name), _slug_taken(exclude_pk))


def _normalise_email(email):
    return email.strip().lower() if email else email


def _clean_input(data):
    """Drop protected keys; a null photo clears the stored one."""
    data = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
    if "profile_photo" in data and data["profile_photo"] is None:
        data["profile_photo"] = ""
    return data


def create_profile(data, actor=None):
    """
    Persist a new submission and return it.

    Any ``status`` or ``slug`` in ``data`` is ignored: the slug is derived
    from the name and the status is always Pending.

    Raises
    ------
    DuplicateEmailError
        If the email is already registered.
    django.core.exceptions.ValidationError
        If a field fails model validation (e.g. age out of range).
    """
    data = _clean_input(data)
    data.pop("status", None)
    data["email"] = _normalise_email(data.get("email"))
    if get_profile_by_email(data["email"]):
        raise DuplicateEmailError(data["email"])

    profile = Profile(
        **data,
        slug=assign_slug(data.get("name", "")),
        status=Profile.Status.PENDING,
    )
    profile.full_clean(validate_unique=False)

    try:
        with transaction.atomic():
            profile.save()
            moderation.log_activity(profile, ActivityLog.Action.CREATED, actor=actor)
    except IntegrityError as exc:
        if get_profile_by_email(data["email"]):
            raise DuplicateEmailError(data["email"]) from exc
        raise

    logger.info("Profile %s created with slug %s", profile.pk, profile.slug)
    transaction.on_commit(lambda: send_submission_received_email(profile))
    return profile


def update_profile(profile_id, data, actor=None):
    """
    Apply a partial update and return the profile, or ``None`` if not found.

    ``data`` may hold any subset of the editable fields, including
    ``status``. A status change is validated by the moderation state machine
    before anything is written; renaming the profile reassigns its slug.
    """
    profile = get_profile(profile_id)
    if profile is None:
        return None

    data = _clean_input(data)
    status = data.pop("status", None)
    if status is not None:
        moderation.check_transition(profile.status, status)

    if "email" in data:
        data["email"] = _normalise_email(data["email"])
        clash = Profile.objects.filter(email__iexact=data["email"]).exclude(pk=profile.pk)
        if clash.exists():
            raise DuplicateEmailError(data["email"])

    changed = [field for field, value in data.items() if getattr(profile, field) != value]
    old_photo = profile.profile_photo.name if "profile_photo" in changed else None

    with transaction.atomic():
        if changed:
            for field in changed:
                setattr(profile, field, data[field])
            if "name" in changed:
                profile.slug = assign_slug(profile.name, exclude_pk=profile.pk)
            profile.full_clean(validate_unique=False)
            profile.save()
            moderation.log_activity(profile, ActivityLog.Action.UPDATED, actor=actor)
            logger.info("Profile %s updated: %s", profile.pk, ", ".join(changed))
        if status is not None:
            moderation.transition(profile, status, actor=actor)

    if old_photo and old_photo != profile.profile_photo.name:
        profile.profile_photo.storage.delete(old_photo)
    return profile


def delete_profile(profile_id, actor=None):
    """Delete a profile; ``True`` if it existed, ``False`` otherwise."""
    profile = get_profile(profile_id)
    if profile is None:
        return False

    photo = profile.profile_photo.name
    with transaction.atomic():
        moderation.log_activity(profile, ActivityLog.Action.DELETED, actor=actor)
        profile.delete()

    if photo:
        profile.profile_photo.storage.delete(photo)
    logger.info("Profile %s deleted", profile_id)
    return True
