"""One-time password services for passwordless sign-in."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.notifications.services import send_email_notification

from .models import OneTimePassword

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999


class OTPError(Exception):
    """Raised when a submitted code cannot be accepted."""

    status_code = 400


def generate_otp() -> str:
    """Return a random six digit code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def otp_expiration(now: datetime | None = None) -> datetime:
    now = now or timezone.now()
    return now + timedelta(minutes=settings.OTP_TTL_MINUTES)


def is_otp_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    now = now or timezone.now()
    return now > expires_at


def send_otp_email(email: str, code: str) -> bool:
    """Email the sign-in code. Returns False when delivery failed."""
    if settings.DEBUG:
        logger.debug(f"[DEV] OTP for {email}: {code}")
    return send_email_notification(
        recipient_email=email,
        subject="Your Rambo verification code",
        template_name=None,
        context={"message": f"Your verification code is: {code}"},
        html_message=f"<p>Your verification code is: <strong>{code}</strong></p>",
    )


def issue_otp(email: str) -> OneTimePassword:
    """Replace any pending codes for ``email`` with a fresh one and send it."""
    with transaction.atomic():
        OneTimePassword.objects.filter(email=email, used=False).delete()
        otp = OneTimePassword.objects.create(
            email=email,
            code=generate_otp(),
            expires_at=otp_expiration(),
        )
    send_otp_email(email, otp.code)
    logger.info(f"OTP issued for {email}")
    return otp


@transaction.atomic
def verify_otp(email: str, code: str):
    """Consume a code and return the matching user, creating a customer if needed.

    Raises:
        OTPError: the code is unknown, already used or expired.
    """
    otp = (
        OneTimePassword.objects.select_for_update()
        .filter(email=email, code=code, used=False)
        .order_by("-created_at")
        .first()
    )
    if otp is None:
        raise OTPError("Invalid or expired OTP")
    if is_otp_expired(otp.expires_at):
        raise OTPError("OTP has expired")

    otp.mark_used()

    User = get_user_model()
    user, created = User.objects.get_or_create(
        email=User.objects.normalize_email(email),
        defaults={"role": User.RoleChoices.CUSTOMER},
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
    user.mark_email_verified()
    logger.info(f"OTP verified for {email} (user {user.id}, created={created})")
    return user


def purge_stale_otps(now: datetime | None = None) -> int:
    """Delete used or expired codes, returning how many were removed."""
    now = now or timezone.now()
    deleted, _ = OneTimePassword.objects.filter(used=True).delete()
    expired, _ = OneTimePassword.objects.filter(expires_at__lt=now).delete()
    return deleted + expired
