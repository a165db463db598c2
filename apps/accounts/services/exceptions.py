"""Errors raised by the sign-in and profile services.

The backend client turns each of these into the ``error`` string of a
result envelope, so the message is what the user ends up seeing.
"""


class AccountsServiceError(Exception):
    """Base class for identity failures."""


class UserRegistrationError(AccountsServiceError):
    """Sign-up rejected, e.g. the email already has an identity."""


class InvalidCredentialsError(AccountsServiceError):
    pass


class InactiveAccountError(AccountsServiceError):
    """The identity exists but an admin has switched it off."""


class InvalidTokenError(AccountsServiceError):
    """Password reset token or refresh token that cannot be used."""
