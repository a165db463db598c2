"""Sign-in and sign-out for email identities."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError, InactiveAccountError, InvalidTokenError

logger = logging.getLogger(__name__)

User = get_user_model()

BAD_CREDENTIALS = "Invalid email or password"


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair and stamp ``last_login``.

    Email lookup ignores case. The row is locked while ``last_login`` is
    written so two concurrent sign-ins do not overwrite each other.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password (same message for both)
        InactiveAccountError: The identity was deactivated
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email)
        .first()
    )
    if user is None or not user.check_password(password):
        logger.info("Rejected sign-in attempt")
        raise InvalidCredentialsError(BAD_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.info("User %s signed in", user.id)
    return user


def sign_out_user(*, refresh_token: str) -> None:
    """
    Blacklist a refresh token so it can no longer mint access tokens.

    Raises:
        InvalidTokenError: If the token is malformed, expired or already blacklisted
    """
    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        raise InvalidTokenError(str(e))
