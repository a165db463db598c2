"""
Domain-specific exceptions for ledger services.

These exceptions represent local validation failures and are caught in
views and converted to 400 responses before any backend call is made.
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger service errors."""
    pass


class ConfirmationMismatchError(LedgerServiceError):
    """Raised when the typed deletion confirmation does not match."""
    pass


class EmptyReportError(LedgerServiceError):
    """Raised when a report is requested for no transactions."""
    pass
