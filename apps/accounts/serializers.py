"""
Serializers for moderator sign-in and sign-out.

Only staff accounts (created with ``manage.py createsuperuser`` or in the
Django admin) may obtain API tokens; there is no public registration.
"""

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()


class LoginSerializer(serializers.Serializer):
    """Authenticates a moderator; the view mints the JWT pair."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["username"],
            password=attrs["password"],
        )
        # Inactive users never authenticate with ModelBackend.
        if user is None:
            raise serializers.ValidationError("Invalid username or password.")
        if not user.is_staff:
            raise serializers.ValidationError("This account cannot moderate profiles.")
        attrs["user"] = user
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()

    def validate_refresh(self, value):
        try:
            return RefreshToken(value)
        except TokenError:
            raise serializers.ValidationError("Invalid or expired token.")

    def save(self, **kwargs):
        self.validated_data["refresh"].blacklist()


class AdminUserSerializer(serializers.ModelSerializer):
    """Read-only view of the signed-in moderator."""

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "is_superuser", "last_login"]
        read_only_fields = fields
