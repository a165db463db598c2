"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def register_user(*, email: str, password: str) -> User:
    """
    Create a sign-in identity.

    The business profile is created by a separate call once the identity
    exists, the same way a hosted identity provider would be used.

    Args:
        email: User's email address
        password: User's password (will be hashed)

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is taken or creation fails
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Email address is already in use")

    try:
        user = User.objects.create_user(email=email, password=password)
    except (IntegrityError, ValueError) as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    logger.info("Registered user %s", user.id)
    return user
