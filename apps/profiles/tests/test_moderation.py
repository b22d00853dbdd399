"""Tests for the Pending → Verified | Rejected state machine."""

from unittest.mock import patch

import pytest

from apps.profiles.models import ActivityLog, Profile
from apps.profiles.moderation import InvalidTransition, check_transition, transition
from conftest import ProfileFactory


class TestCheckTransition:

    @pytest.mark.parametrize(
        "current, requested",
        [
            ("Pending", "Verified"),
            ("Pending", "Rejected"),
            ("Pending", "Pending"),
            ("Verified", "Verified"),
            ("Rejected", "Rejected"),
        ],
    )
    def test_allowed(self, current, requested):
        check_transition(current, requested)

    @pytest.mark.parametrize(
        "current, requested",
        [
            ("Verified", "Pending"),
            ("Rejected", "Pending"),
            ("Verified", "Rejected"),
            ("Rejected", "Verified"),
            ("Pending", "Approved"),
        ],
    )
    def test_blocked(self, current, requested):
        with pytest.raises(InvalidTransition) as exc:
            check_transition(current, requested)
        assert current in str(exc.value)

    def test_accepts_enum_members(self):
        check_transition(Profile.Status.PENDING, Profile.Status.VERIFIED)


@pytest.mark.django_db
class TestTransition:

    def test_verify_persists_and_logs(self, profile, admin_user):
        assert transition(profile, "Verified", actor=admin_user) is True
        profile.refresh_from_db()
        assert profile.status == Profile.Status.VERIFIED
        entry = ActivityLog.objects.get()
        assert entry.action == ActivityLog.Action.VERIFIED
        assert entry.profile == profile
        assert entry.actor == admin_user

    def test_reject_logs_rejected(self, profile):
        transition(profile, Profile.Status.REJECTED)
        assert ActivityLog.objects.get().action == ActivityLog.Action.REJECTED

    def test_same_state_is_noop(self, profile):
        assert transition(profile, "Pending") is False
        assert not ActivityLog.objects.exists()

    def test_terminal_state_blocks(self):
        p = ProfileFactory(status=Profile.Status.VERIFIED)
        with pytest.raises(InvalidTransition):
            transition(p, "Pending")
        p.refresh_from_db()
        assert p.status == Profile.Status.VERIFIED
        assert not ActivityLog.objects.exists()

    def test_anonymous_actor_not_recorded(self, profile):
        from django.contrib.auth.models import AnonymousUser

        transition(profile, "Verified", actor=AnonymousUser())
        assert ActivityLog.objects.get().actor is None

    @patch("apps.profiles.moderation.send_moderation_decision_email")
    def test_decision_email_after_commit(self, send, profile, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            transition(profile, "Rejected")
        send.assert_called_once_with(profile)

    @patch("apps.profiles.moderation.send_moderation_decision_email")
    def test_no_email_for_noop(self, send, profile, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            transition(profile, "Pending")
        send.assert_not_called()
