"""
Core Data Models for Snacker

These models define the schema of the single stored document and of the
values derived from it.

DESIGN DECISION: Persisted models are deliberately lenient. A stored document
that fails validation is thrown away as a whole, so amount/name rules belong
to the form layer, not here.
"""

import datetime as dt
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a money movement. Also used as the category kind."""
    INCOME = "income"
    EXPENSE = "expense"


class AppPhase(str, Enum):
    """
    Readiness of the application state.

    Derived in order from: loading flag, onboarding flag, username presence.
    """
    LOADING = "loading"
    NEEDS_ONBOARDING = "needs_onboarding"
    NEEDS_USERNAME = "needs_username"
    READY = "ready"


# =============================================================================
# PERSISTED MODELS
# =============================================================================

class StoredModel(BaseModel):
    """Base for everything written to storage (camelCase on the wire)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class TransactionDraft(StoredModel):
    """Transaction data as entered, before an identifier is assigned."""

    type: TransactionType
    amount: float = Field(
        ...,
        description="Positive magnitude; direction comes from type"
    )
    category_id: str
    date: dt.date = Field(
        ...,
        description="Calendar day, serialized as yyyy-MM-dd"
    )
    notes: Optional[str] = None
    is_favorite: Optional[bool] = Field(
        default=None,
        description="Only meaningful for expenses"
    )


class Transaction(TransactionDraft):
    """A recorded income or expense entry."""

    id: str


class CategoryDraft(StoredModel):
    """Category data as entered. Icon falls back to 'Tag' when omitted."""

    name: str
    type: TransactionType
    icon: Optional[str] = None


class Category(CategoryDraft):
    """
    A named, typed label for transactions.

    icon may be missing on documents written by older versions;
    initialization backfills it for default categories.
    """

    id: str


class TransactionFilters(StoredModel):
    """Saved transaction-page filter preferences. All fields optional."""

    type: Optional[Literal["income", "expense", "all"]] = None
    category_id: Optional[str] = None
    date_from: Optional[dt.datetime] = None
    date_to: Optional[dt.datetime] = None
    search_term: Optional[str] = None


class StoredData(StoredModel):
    """
    The single persisted aggregate.

    Every mutation replaces this document as a whole.
    """

    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    user_has_onboarded: bool = False
    username: Optional[str] = None
    profile_picture_data_uri: Optional[str] = None
    transaction_page_filters: Optional[TransactionFilters] = None

    @field_validator('user_has_onboarded', mode='before')
    @classmethod
    def null_means_not_onboarded(cls, v):
        return False if v is None else v


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class MonthlySummary(BaseModel):
    """Income and expense totals for one calendar month."""

    income: float = 0.0
    expenses: float = 0.0
    balance: float = Field(
        default=0.0,
        description="income - expenses; may be negative"
    )


class ExpenseSlice(BaseModel):
    """One category's share of a month's expenses, ready for charting."""

    category_id: str
    name: str
    value: float
    fill: str = Field(
        ...,
        description="CSS hsl() color derived from the slice's position"
    )
