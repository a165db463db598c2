"""
Transaction report export.

Renders the filtered transactions and their totals into a self-contained
HTML document. The only non-deterministic part is the "Generated on" date.
"""

from decimal import Decimal
from typing import Optional, Sequence

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone

from .exceptions import EmptyReportError
from .filtering import LedgerTotals, date_key

REPORT_TEMPLATE = 'ledger/transaction_report.html'
REPORT_CONTENT_TYPE = 'text/html; charset=utf-8'


def format_amount(value) -> str:
    """Thousands-separated amount with two decimals, e.g. ``1,200.00``."""
    return f"{Decimal(value):,.2f}"


def report_filename(ledger_name: str) -> str:
    return f"{ledger_name}_transactions.html"


def render_transaction_report(
    ledger,
    transactions: Sequence,
    totals: LedgerTotals,
    generated_on=None,
) -> str:
    """
    Render the report document.

    Args:
        ledger: Ledger providing the title and description
        transactions: Rows in display order
        totals: Totals computed over exactly these rows
        generated_on: Date shown in the header; defaults to today

    Returns:
        The HTML document as a string

    Raises:
        EmptyReportError: If there are no transactions to export
    """
    if not transactions:
        raise EmptyReportError("No transactions to export")

    generated_on = generated_on or timezone.localdate()

    rows = [
        {
            'date': date_key(t.date),
            'particulars': t.particulars,
            'category': t.category,
            'category_class': t.category.lower(),
            'debit': format_amount(t.debit) if t.debit > 0 else '',
            'credit': format_amount(t.credit) if t.credit > 0 else '',
        }
        for t in transactions
    ]

    context = {
        'ledger_name': ledger.name,
        'ledger_description': ledger.description,
        'generated_on': generated_on,
        'currency': settings.REPORT_CURRENCY_SYMBOL,
        'total_debit': format_amount(totals.total_debit),
        'total_credit': format_amount(totals.total_credit),
        'balance': format_amount(totals.balance),
        'balance_negative': totals.balance < 0,
        'rows': rows,
    }
    return render_to_string(REPORT_TEMPLATE, context)
