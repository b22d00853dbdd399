"""
Serializers for profiles and the moderation activity log.

Validation rules:
  - email is unique, compared case-insensitively
  - age, when given, is within 18–100 (from the model validators)
  - profile_photo must be a real JPEG/PNG/GIF/WebP image of at most 5 MB
  - status changes follow Pending → Verified | Rejected
  - slug and creation time are always server-assigned

Persistence is delegated to ``apps.profiles.storage`` so the serializer
never writes to the database directly.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from . import storage
from .models import ActivityLog, Profile
from .moderation import InvalidTransition, check_transition
from .uploads import PhotoValidationError, validate_photo


def _validation_error(exc):
    if hasattr(exc, "error_dict"):
        return serializers.ValidationError(exc.message_dict)
    return serializers.ValidationError(exc.messages)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------
class ProfileSerializer(serializers.ModelSerializer):
    """
    Full serializer for profile create / read / update.

    Read-only computed fields:
      - `skills_list`: skills split on commas
      - `achievements_list`: achievements split on new lines

    `status` is ignored on create (new profiles are always Pending) and
    only changes through the moderation rules on update.
    """

    skills_list = serializers.ListField(child=serializers.CharField(), read_only=True)
    achievements_list = serializers.ListField(child=serializers.CharField(), read_only=True)
    profile_photo = serializers.ImageField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=Profile.Status.choices, required=False)

    class Meta:
        model = Profile
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "age",
            "profession",
            "experience",
            "skills",
            "skills_list",
            "education",
            "work_experience",
            "achievements",
            "achievements_list",
            "profile_photo",
            "slug",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "slug", "created_at", "updated_at"]
        extra_kwargs = {
            # Uniqueness is checked case-insensitively in validate_email.
            "email": {"validators": []},
        }

    # ------------------------------------------------------------------
    # Field-level validation
    # ------------------------------------------------------------------
    def validate_email(self, value):
        """Normalise and check uniqueness (case-insensitive)."""
        value = value.lower().strip()
        qs = Profile.objects.filter(email__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError(storage.DuplicateEmailError.message)
        return value

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value

    def validate_profile_photo(self, value):
        if value is None:
            return value
        try:
            return validate_photo(value)
        except PhotoValidationError as exc:
            raise serializers.ValidationError(str(exc))

    def validate_status(self, value):
        """On update, enforce the moderation lifecycle."""
        if self.instance:
            try:
                check_transition(self.instance.status, value)
            except InvalidTransition as exc:
                raise serializers.ValidationError(str(exc))
        return value

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _actor(self):
        request = self.context.get("request")
        return getattr(request, "user", None)

    def create(self, validated_data):
        try:
            return storage.create_profile(validated_data, actor=self._actor())
        except storage.DuplicateEmailError as exc:
            raise serializers.ValidationError({"email": [str(exc)]})
        except DjangoValidationError as exc:
            raise _validation_error(exc)

    def update(self, instance, validated_data):
        try:
            profile = storage.update_profile(instance.pk, validated_data, actor=self._actor())
        except storage.DuplicateEmailError as exc:
            raise serializers.ValidationError({"email": [str(exc)]})
        except InvalidTransition as exc:
            raise serializers.ValidationError({"status": [str(exc)]})
        except DjangoValidationError as exc:
            raise _validation_error(exc)
        if profile is None:
            raise serializers.ValidationError({"detail": "Profile no longer exists."})
        return profile


class ProfileListSerializer(ProfileSerializer):
    """Trimmed card representation for the public listing."""

    class Meta(ProfileSerializer.Meta):
        fields = [
            "id",
            "name",
            "profession",
            "experience",
            "address",
            "skills_list",
            "profile_photo",
            "slug",
            "status",
            "created_at",
        ]


# ---------------------------------------------------------------------------
# Admin dashboard (read-only aggregates)
# ---------------------------------------------------------------------------
class ProfileStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())


class SubmissionAnalyticsSerializer(serializers.Serializer):
    today = serializers.IntegerField()
    week = serializers.IntegerField()
    month = serializers.IntegerField()


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------
class ActivityLogSerializer(serializers.ModelSerializer):
    profile_slug = serializers.CharField(source="profile.slug", read_only=True, default=None)
    actor_username = serializers.CharField(source="actor.username", read_only=True, default=None)

    class Meta:
        model = ActivityLog
        fields = [
            "id",
            "action",
            "profile",
            "profile_name",
            "profile_slug",
            "actor_username",
            "timestamp",
        ]
        read_only_fields = fields
