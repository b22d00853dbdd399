"""Profile and ActivityLog models for the bio-data directory."""

import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_AGE = 18
MAX_AGE = 100


def profile_photo_path(instance, filename):
    """Store uploads as ``profiles/<uuid>.<ext>`` under MEDIA_ROOT."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "jpg"
    return f"profiles/{uuid.uuid4().hex}.{ext}"


class Profile(models.Model):
    """
    A single person's bio-data submission.

    New profiles always start out Pending; only an admin moves them to
    Verified or Rejected (see ``apps.profiles.moderation``). The slug is
    derived from the name and is the public identifier in profile URLs.
    """

    class Status(models.TextChoices):
        PENDING = "Pending", "Pending"
        VERIFIED = "Verified", "Verified"
        REJECTED = "Rejected", "Rejected"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True, default="")
    address = models.CharField(max_length=300, blank=True, default="")
    age = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(MIN_AGE), MaxValueValidator(MAX_AGE)],
    )
    profession = models.CharField(max_length=200)
    experience = models.TextField(blank=True, default="")
    skills = models.TextField(
        blank=True,
        default="",
        help_text="Comma-separated list, e.g. Python, SQL, Django",
    )
    education = models.TextField(blank=True, default="")
    work_experience = models.TextField(blank=True, default="")
    achievements = models.TextField(
        blank=True,
        default="",
        help_text="One achievement per line.",
    )
    profile_photo = models.ImageField(
        upload_to=profile_photo_path,
        max_length=255,
        blank=True,
        default="",
    )
    slug = models.SlugField(max_length=220, unique=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    @property
    def skills_list(self):
        return [s.strip() for s in self.skills.split(",") if s.strip()]

    @property
    def achievements_list(self):
        return [a.strip() for a in self.achievements.splitlines() if a.strip()]


class ActivityLog(models.Model):
    """
    Append-only audit trail of admin and submission actions on profiles.

    ``profile_name`` is a snapshot so entries stay readable after the
    profile itself has been deleted.
    """

    class Action(models.TextChoices):
        CREATED = "created", "Created"
        UPDATED = "updated", "Updated"
        VERIFIED = "verified", "Verified"
        REJECTED = "rejected", "Rejected"
        DELETED = "deleted", "Deleted"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        Profile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activity",
    )
    profile_name = models.CharField(max_length=200)
    action = models.CharField(max_length=20, choices=Action.choices)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="profile_activity",
    )
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-timestamp"]

    def __str__(self):
        return f"{self.action} {self.profile_name}"
