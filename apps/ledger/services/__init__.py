"""
Ledger app services layer.

Pure functions over transactions that are already loaded: filtering,
totals, report rendering and the deletion confirmation gate.
"""

from .exceptions import (
    LedgerServiceError,
    ConfirmationMismatchError,
    EmptyReportError,
)
from .confirmation import (
    DELETE_CONFIRMATION_PHRASE,
    check_delete_confirmation,
)
from .filtering import (
    ALL_CATEGORIES,
    TransactionFilters,
    LedgerTotals,
    filter_transactions,
    compute_totals,
    summarize,
    sort_by_date_desc,
)
from .report_export import (
    REPORT_CONTENT_TYPE,
    render_transaction_report,
    report_filename,
)

__all__ = [
    # Exceptions
    'LedgerServiceError',
    'ConfirmationMismatchError',
    'EmptyReportError',

    # Confirmation gate
    'DELETE_CONFIRMATION_PHRASE',
    'check_delete_confirmation',

    # Filtering & aggregation
    'ALL_CATEGORIES',
    'TransactionFilters',
    'LedgerTotals',
    'filter_transactions',
    'compute_totals',
    'summarize',
    'sort_by_date_desc',

    # Report export
    'REPORT_CONTENT_TYPE',
    'render_transaction_report',
    'report_filename',
]
