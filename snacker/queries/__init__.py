"""Query package."""

from snacker.queries.filters import (
    amount_text,
    bound_day,
    default_filters,
    filter_transactions,
    matches,
)

__all__ = [
    "amount_text",
    "bound_day",
    "default_filters",
    "filter_transactions",
    "matches",
]
