"""
Notification emails to profile owners, sent through SendGrid.

Two messages exist: "submission received" after a public create and
"verified / rejected" after a moderation decision. Both are scheduled with
``transaction.on_commit`` by the caller and never raise, so a mail outage
cannot fail a submission or a moderation request.
"""

import logging

from django.conf import settings
from django.utils.html import escape
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

logger = logging.getLogger(__name__)

_LAYOUT = (
    "<div style='font-family:sans-serif;max-width:600px;margin:auto'>"
    "<h2 style='color:#1e293b'>{heading}</h2>"
    "<p>Hi {name},</p>"
    "{body}"
    "</div>"
)


def _site_name():
    return getattr(settings, "SITE_NAME", "Show Yourself")


def profile_url(profile):
    """Public URL of ``profile`` on the frontend."""
    base = getattr(settings, "FRONTEND_BASE_URL", "").rstrip("/")
    return f"{base}/profile/{profile.slug}"


def _deliver(profile, subject, heading, body):
    """
    Hand one message for ``profile.email`` to SendGrid.

    Returns ``False`` (after logging) when no API key is configured or the
    API call fails.
    """
    api_key = getattr(settings, "SENDGRID_API_KEY", "")
    if not api_key:
        logger.warning("SENDGRID_API_KEY not set; skipping %r to %s", subject, profile.email)
        return False

    message = Mail(
        from_email=settings.DEFAULT_FROM_EMAIL,
        to_emails=profile.email,
        subject=subject,
        html_content=_LAYOUT.format(heading=heading, name=escape(profile.name), body=body),
    )
    try:
        response = SendGridAPIClient(api_key).send(message)
    except Exception as exc:
        logger.error("SendGrid rejected %r to %s: %s", subject, profile.email, exc)
        return False
    logger.info("Sent %r to %s (status %s)", subject, profile.email, response.status_code)
    return True


def send_submission_received_email(profile):
    """Let the submitter know their profile is waiting for review."""
    site = _site_name()
    body = (
        f"<p>We have received your bio-data. A moderator will review it "
        f"shortly and it will appear in the {site} directory once verified.</p>"
        f"<p style='font-size:12px;color:#94a3b8'>If you did not submit "
        f"this profile, please ignore this email.</p>"
    )
    return _deliver(
        profile,
        subject=f"Profile received | {site}",
        heading="Thanks for submitting your profile",
        body=body,
    )


def send_moderation_decision_email(profile):
    """Tell the submitter whether their profile was verified or rejected."""
    site = _site_name()
    if profile.status == profile.Status.VERIFIED:
        subject = f"Your profile is live | {site}"
        body = (
            f"<p>Good news: your profile has been verified and is now "
            f"publicly listed.</p>"
            f"<p style='text-align:center;margin:32px 0'>"
            f"<a href='{profile_url(profile)}' style='background:#2563eb;"
            f"color:#fff;padding:12px 32px;border-radius:6px;"
            f"text-decoration:none;font-weight:600'>View your profile</a></p>"
        )
    else:
        subject = f"Your profile submission | {site}"
        body = (
            "<p>Unfortunately your profile could not be approved for the "
            "directory. You are welcome to submit an updated profile.</p>"
        )
    return _deliver(profile, subject=subject, heading=f"Profile {profile.status.lower()}", body=body)
