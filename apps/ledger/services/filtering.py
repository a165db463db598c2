"""
Ledger filtering and aggregation.

Works on transactions already loaded in memory. Nothing here touches the
database, so results are re-derived on every request from the current
filters:

    filtered, totals = summarize(transactions, TransactionFilters(category='Income'))
    totals.balance  # total_credit - total_debit

Dates are compared as ISO ``YYYY-MM-DD`` strings, which sort the same way as
the calendar.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Tuple

ALL_CATEGORIES = 'all'


@dataclass(frozen=True)
class TransactionFilters:
    """Active criteria. Empty values switch a criterion off."""

    search: str = ''
    category: str = ALL_CATEGORIES
    start_date: str = ''
    end_date: str = ''

    @property
    def is_empty(self) -> bool:
        return (
            not self.search
            and self.category == ALL_CATEGORIES
            and not self.start_date
            and not self.end_date
        )


@dataclass(frozen=True)
class LedgerTotals:
    total_debit: Decimal = Decimal('0')
    total_credit: Decimal = Decimal('0')

    @property
    def balance(self) -> Decimal:
        return self.total_credit - self.total_debit

    def as_dict(self) -> dict:
        return {
            'total_debit': self.total_debit,
            'total_credit': self.total_credit,
            'balance': self.balance,
        }


def date_key(value) -> str:
    """ISO string for a date or an already string-encoded date."""
    if isinstance(value, date):
        return value.isoformat()
    return str(value or '')


def matches(transaction, filters: TransactionFilters) -> bool:
    """True when the transaction passes every active criterion."""
    if filters.search and filters.search.lower() not in transaction.particulars.lower():
        return False

    if filters.category != ALL_CATEGORIES and transaction.category != filters.category:
        return False

    day = date_key(transaction.date)
    if filters.start_date and day < filters.start_date:
        return False
    if filters.end_date and day > filters.end_date:
        return False

    return True


def filter_transactions(transactions: Iterable, filters: TransactionFilters) -> List:
    """Matching transactions in input order."""
    return [t for t in transactions if matches(t, filters)]


def compute_totals(transactions: Iterable) -> LedgerTotals:
    total_debit = Decimal('0')
    total_credit = Decimal('0')
    for t in transactions:
        total_debit += Decimal(t.debit)
        total_credit += Decimal(t.credit)
    return LedgerTotals(total_debit=total_debit, total_credit=total_credit)


def summarize(transactions: Iterable, filters: TransactionFilters) -> Tuple[List, LedgerTotals]:
    """Filter, then total the filtered subset."""
    filtered = filter_transactions(transactions, filters)
    return filtered, compute_totals(filtered)


def sort_by_date_desc(transactions: Iterable) -> List:
    """Most recent date first. Stable, so same-day rows keep their load order."""
    return sorted(transactions, key=lambda t: date_key(t.date), reverse=True)
