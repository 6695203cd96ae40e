"""
Transaction list filtering

Applies saved TransactionFilters to a list of transactions, the way the
transactions page shows them: newest first.
"""

import datetime as dt
import re
from typing import Iterable, Optional

from snacker.models.finance import Transaction, TransactionFilters
from snacker.state.app_state import month_bounds


ALL_TYPES = "all"

_EXPONENT_PADDING = re.compile(r"e([+-])0+(\d)")


def amount_text(amount: float) -> str:
    """Plain display form of an amount: 100.0 -> '100', 42.5 -> '42.5'."""
    if float(amount).is_integer():
        return str(int(amount))
    # 1e-07 -> 1e-7, the way amounts are written everywhere else
    return _EXPONENT_PADDING.sub(r"e\1\2", repr(float(amount)))


def bound_day(value: Optional[dt.datetime]) -> Optional[dt.date]:
    """Calendar day of a filter bound, in local time when it carries a zone."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def matches(transaction: Transaction, filters: TransactionFilters) -> bool:
    """Check one transaction against every set filter."""
    if (
        filters.type
        and filters.type != ALL_TYPES
        and transaction.type.value != filters.type
    ):
        return False

    if filters.category_id and transaction.category_id != filters.category_id:
        return False

    date_from = bound_day(filters.date_from)
    if date_from is not None and transaction.date < date_from:
        return False

    date_to = bound_day(filters.date_to)
    if date_to is not None and transaction.date > date_to:
        return False

    if filters.search_term:
        term = filters.search_term.lower()
        notes_match = term in (transaction.notes or "").lower()
        amount_match = term in amount_text(transaction.amount)
        if not notes_match and not amount_match:
            return False

    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: Optional[TransactionFilters] = None,
) -> list[Transaction]:
    """
    Filter transactions and sort them by date, newest first.

    Transactions on the same day keep their input order.
    """
    filters = filters or TransactionFilters()
    selected = [t for t in transactions if matches(t, filters)]
    return sorted(selected, key=lambda t: t.date, reverse=True)


def default_filters(today: dt.date) -> TransactionFilters:
    """All types, limited to the month containing today."""
    start, end = month_bounds(today)
    return TransactionFilters(
        type=ALL_TYPES,
        date_from=dt.datetime.combine(start, dt.time.min),
        date_to=dt.datetime.combine(end, dt.time.max),
    )
