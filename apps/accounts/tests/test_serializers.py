"""Unit tests for accounts serializers."""

import pytest

from apps.accounts.serializers import AdminUserSerializer, LoginSerializer
from conftest import AdminUserFactory


@pytest.mark.django_db
class TestLoginSerializer:

    def test_valid_staff(self, admin_user):
        s = LoginSerializer(data={"username": admin_user.username, "password": "TestPass123!"})
        assert s.is_valid(), s.errors
        assert s.validated_data["user"] == admin_user

    def test_non_staff(self, user):
        s = LoginSerializer(data={"username": user.username, "password": "TestPass123!"})
        assert not s.is_valid()
        assert "cannot moderate" in str(s.errors)

    def test_inactive_user(self):
        inactive = AdminUserFactory(is_active=False)
        s = LoginSerializer(data={"username": inactive.username, "password": "TestPass123!"})
        assert not s.is_valid()

    def test_unknown_user(self, db):
        s = LoginSerializer(data={"username": "ghost", "password": "whatever"})
        assert not s.is_valid()
        assert "Invalid username or password." in str(s.errors)


@pytest.mark.django_db
class TestAdminUserSerializer:

    def test_fields(self, admin_user):
        data = AdminUserSerializer(admin_user).data
        assert data["username"] == admin_user.username
        assert "password" not in data
        assert "is_superuser" in data
