"""
Shared pytest fixtures and factory-boy factories for both apps.

Tests opt into the database with ``@pytest.mark.django_db``; the
``media_root`` fixture is autouse so no test writes photos into the repo.
"""

import io

import factory
import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from apps.profiles.models import ActivityLog, Profile

User = get_user_model()


# ===================================================================
# Factories
# ===================================================================

class UserFactory(factory.django.DjangoModelFactory):
    """Create a User with a hashed password and unique username/email."""

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"testuser{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password = factory.PostGeneration(
        lambda obj, create, extracted, **kw: obj.set_password(extracted or "TestPass123!")
        or obj.save()
    )


class AdminUserFactory(UserFactory):
    """A staff user allowed to moderate profiles."""

    username = factory.Sequence(lambda n: f"moderator{n}")
    is_staff = True


class ProfileFactory(factory.django.DjangoModelFactory):
    """Create a Profile directly (bypasses the store; slug from the name)."""

    class Meta:
        model = Profile

    name = factory.Sequence(lambda n: f"Person {n}")
    email = factory.LazyAttribute(lambda o: f"{o.slug}@example.com")
    profession = "Software Engineer"
    experience = "5 years"
    skills = "Python, Django, SQL"
    slug = factory.Sequence(lambda n: f"person-{n}")
    status = Profile.Status.PENDING


class ActivityLogFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ActivityLog

    profile = factory.SubFactory(ProfileFactory)
    profile_name = factory.LazyAttribute(lambda o: o.profile.name)
    action = ActivityLog.Action.CREATED


def make_image(name="photo.png", fmt="PNG", content_type="image/png", size=(10, 10)):
    """Return an in-memory uploaded image file."""
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format=fmt)
    return SimpleUploadedFile(name, buf.getvalue(), content_type=content_type)


# ===================================================================
# Fixtures
# ===================================================================

@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Write uploaded photos to a per-test temporary directory."""
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A persisted non-staff User (password: TestPass123!)."""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """A persisted staff User (password: TestPass123!)."""
    return AdminUserFactory()


@pytest.fixture
def admin_client(admin_user):
    """Authenticated DRF client for ``admin_user``."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def user_client(user):
    """Authenticated DRF client for a non-staff ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def profile(db):
    """A Pending profile."""
    return ProfileFactory()


@pytest.fixture
def verified_profile(db):
    """A Verified profile visible to the public."""
    return ProfileFactory(status=Profile.Status.VERIFIED)
