"""
Deletion confirmation gate.

Ledger and transaction deletes only go ahead when the user has typed the
confirmation phrase. This is a guard against accidental clicks, not an
access check; ownership is enforced separately by the view permissions.
"""

from .exceptions import ConfirmationMismatchError

DELETE_CONFIRMATION_PHRASE = 'confirm'
CONFIRMATION_ERROR_MESSAGE = 'Incorrect password'


def check_delete_confirmation(typed: str) -> None:
    """
    Raise unless ``typed`` is exactly the confirmation phrase.

    Raises:
        ConfirmationMismatchError: On any mismatch, including surrounding whitespace
    """
    if typed != DELETE_CONFIRMATION_PHRASE:
        raise ConfirmationMismatchError(CONFIRMATION_ERROR_MESSAGE)
