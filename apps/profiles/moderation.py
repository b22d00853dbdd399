"""
Moderation state machine for profile status.

Pending is the only non-terminal state: an admin either verifies or rejects
a submission, and neither decision can be reversed. Every real transition is
recorded in the ActivityLog.
"""

import logging

from django.db import transaction

from .emails import send_moderation_decision_email
from .models import ActivityLog, Profile

logger = logging.getLogger(__name__)

Status = Profile.Status

VALID_TRANSITIONS = {
    Status.PENDING.value: {Status.PENDING.value, Status.VERIFIED.value, Status.REJECTED.value},
    Status.VERIFIED.value: {Status.VERIFIED.value},
    Status.REJECTED.value: {Status.REJECTED.value},
}

_STATUS_ACTIONS = {
    Status.VERIFIED.value: ActivityLog.Action.VERIFIED,
    Status.REJECTED.value: ActivityLog.Action.REJECTED,
}


class InvalidTransition(ValueError):
    """Raised when a status change is not allowed from the current state."""

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        allowed = ", ".join(sorted(VALID_TRANSITIONS.get(current, ())))
        super().__init__(
            f"Invalid transition from '{current}' to '{requested}'. "
            f"Allowed: {allowed}."
        )


def check_transition(current, requested):
    """Raise ``InvalidTransition`` unless ``current`` may move to ``requested``."""
    current, requested = str(current), str(requested)
    if requested not in Status.values:
        raise InvalidTransition(current, requested)
    if requested not in VALID_TRANSITIONS.get(current, set()):
        raise InvalidTransition(current, requested)


def log_activity(profile, action, actor=None):
    """Append an audit entry for ``profile``."""
    return ActivityLog.objects.create(
        profile=profile if profile.pk and action != ActivityLog.Action.DELETED else None,
        profile_name=profile.name,
        action=action,
        actor=actor if actor is not None and actor.is_authenticated else None,
    )


def transition(profile, requested, actor=None):
    """
    Move ``profile`` to ``requested`` status and persist it.

    A same-state request is a no-op (nothing saved, nothing logged).
    Returns ``True`` if the status actually changed.
    """
    current, requested = str(profile.status), str(requested)
    check_transition(current, requested)
    if requested == current:
        return False

    with transaction.atomic():
        profile.status = requested
        profile.save(update_fields=["status", "updated_at"])
        log_activity(profile, _STATUS_ACTIONS[requested], actor=actor)

    logger.info("Profile %s moved %s -> %s", profile.pk, current, requested)
    transaction.on_commit(lambda: send_moderation_decision_email(profile))
    return True
