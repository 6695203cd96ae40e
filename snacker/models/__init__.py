"""
Data Models Package

Pydantic models for the stored document and the views derived from it.
"""

from snacker.models.finance import (
    AppPhase,
    Category,
    CategoryDraft,
    ExpenseSlice,
    MonthlySummary,
    StoredData,
    Transaction,
    TransactionDraft,
    TransactionFilters,
    TransactionType,
)
from snacker.models.defaults import (
    ALL_DEFAULT_CATEGORIES,
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
    FALLBACK_CATEGORY_ICON,
    LOCAL_STORAGE_KEY,
    initial_stored_data,
)

__all__ = [
    # Stored models
    "Category",
    "CategoryDraft",
    "StoredData",
    "Transaction",
    "TransactionDraft",
    "TransactionFilters",
    "TransactionType",
    # Derived views
    "AppPhase",
    "ExpenseSlice",
    "MonthlySummary",
    # Defaults
    "ALL_DEFAULT_CATEGORIES",
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_INCOME_CATEGORIES",
    "FALLBACK_CATEGORY_ICON",
    "LOCAL_STORAGE_KEY",
    "initial_stored_data",
]
