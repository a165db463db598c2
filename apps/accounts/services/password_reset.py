"""Password reset service."""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

User = get_user_model()


def request_password_reset(*, email: str) -> None:
    """
    Generate a reset token and email the reset link.

    Unknown or inactive addresses are ignored so callers cannot probe
    which emails are registered.

    Args:
        email: User's email address
    """
    with transaction.atomic():
        user = (
            User.objects
            .select_for_update()
            .filter(email__iexact=email, is_active=True)
            .first()
        )
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        reset_token = secrets.token_urlsafe(32)
        user.password_reset_token = reset_token
        user.password_reset_requested_at = timezone.now()
        user.save(update_fields=['password_reset_token', 'password_reset_requested_at'])

    reset_link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={reset_token}"
    send_mail(
        subject='Reset your Parlad Boutique password',
        message=(
            "We received a request to reset your password.\n\n"
            f"Open this link to choose a new one:\n{reset_link}\n\n"
            f"The link expires in {settings.PASSWORD_RESET_TIMEOUT_HOURS} hours. "
            "If you did not ask for a reset you can ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info("Password reset email sent to user %s", user.id)


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Args:
        token: Reset token
        new_password: New password

    Returns:
        User instance

    Raises:
        InvalidTokenError: If token is invalid or expired
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(password_reset_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    max_age = timedelta(hours=settings.PASSWORD_RESET_TIMEOUT_HOURS)
    requested_at = user.password_reset_requested_at
    if requested_at is None or timezone.now() - requested_at > max_age:
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.password_reset_token = None
    user.password_reset_requested_at = None
    user.save(update_fields=['password', 'password_reset_token', 'password_reset_requested_at'])

    return user
