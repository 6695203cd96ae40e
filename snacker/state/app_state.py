"""
Application State Facade

DESIGN DECISION: Every operation reads the current document, builds a new
one with the change applied, and hands the whole document to the store.
Nothing is mutated in place and nothing is cached: derived views are
recomputed from the in-memory lists on every call.

The facade assumes its input was validated by the form layer.
"""

import calendar
import datetime as dt
from typing import Optional
from uuid import uuid4

import structlog

from snacker.models.defaults import ALL_DEFAULT_CATEGORIES, FALLBACK_CATEGORY_ICON
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
from snacker.services.storage import LocalStore


# Chart palette progression for the expense distribution
BASE_HUE = 90
BASE_SATURATION = 39
BASE_LIGHTNESS = 31

UNKNOWN_CATEGORY_NAME = "Unknown"


def _as_day(value: dt.date) -> dt.date:
    """Drop the time component of a datetime; dates pass through."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def month_bounds(value: dt.date) -> tuple[dt.date, dt.date]:
    """First and last calendar day of the month containing value."""
    day = _as_day(value)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def slice_fill(index: int) -> str:
    """Deterministic chart color for the index-th distribution slice."""
    hue = (BASE_HUE + index * 30) % 360
    lightness = BASE_LIGHTNESS + (5 if index % 2 == 0 else -5)
    saturation = BASE_SATURATION + (5 if index % 3 == 0 else -5)
    return f"hsl({hue}, {saturation}%, {lightness}%)"


def merge_default_categories(
    categories: list[Category],
) -> tuple[list[Category], bool]:
    """
    Add missing default categories and backfill missing default icons.

    User-added categories and existing defaults are kept as they are.

    Returns:
        (merged_categories, changed)
    """
    changed = False
    existing_ids = {c.id for c in categories}
    merged = list(categories)

    missing = [dc for dc in ALL_DEFAULT_CATEGORIES if dc.id not in existing_ids]
    if missing:
        merged.extend(missing)
        changed = True

    defaults_by_id = {dc.id: dc for dc in ALL_DEFAULT_CATEGORIES}
    backfilled = []
    for category in merged:
        default = defaults_by_id.get(category.id)
        if default is not None and not category.icon:
            category = category.model_copy(update={"icon": default.icon})
            changed = True
        backfilled.append(category)

    return backfilled, changed


class AppState:
    """
    In-memory view of the stored document with CRUD and derived views.

    Create one per application run and pass it to consumers
    (see snacker.state.context for the injection scope).
    """

    def __init__(self, store: LocalStore[StoredData]):
        self._store = store
        self._initialized = False
        self._logger = structlog.get_logger(__name__)

    # -------------------------------------------------------------------------
    # Initialization and readiness
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Load the document (if not loaded yet) and merge default categories.

        Persists only when the merge changed something. Runs once.
        """
        if self._initialized:
            return

        if self._store.is_loading:
            self._store.load()

        merged, changed = merge_default_categories(self._store.value.categories)
        if changed:
            added = len(merged) - len(self._store.value.categories)
            self._store.save(
                lambda prev: prev.model_copy(update={"categories": merged})
            )
            self._logger.info("default_categories_merged", added=added)

        self._initialized = True

    @property
    def is_loading_data(self) -> bool:
        return self._store.is_loading or not self._initialized

    @property
    def phase(self) -> AppPhase:
        """Readiness: loading, then onboarding, then username, then ready."""
        if self.is_loading_data:
            return AppPhase.LOADING
        if not self.user_has_onboarded:
            return AppPhase.NEEDS_ONBOARDING
        if not (self.username or "").strip():
            return AppPhase.NEEDS_USERNAME
        return AppPhase.READY

    # -------------------------------------------------------------------------
    # Document fields
    # -------------------------------------------------------------------------

    @property
    def data(self) -> StoredData:
        return self._store.value

    @property
    def transactions(self) -> list[Transaction]:
        return self._store.value.transactions

    @property
    def categories(self) -> list[Category]:
        return self._store.value.categories

    @property
    def user_has_onboarded(self) -> bool:
        return self._store.value.user_has_onboarded

    @property
    def username(self) -> Optional[str]:
        return self._store.value.username

    @property
    def profile_picture_data_uri(self) -> Optional[str]:
        return self._store.value.profile_picture_data_uri

    @property
    def transaction_page_filters(self) -> Optional[TransactionFilters]:
        return self._store.value.transaction_page_filters

    def _update(self, **fields) -> None:
        self._store.save(lambda prev: prev.model_copy(update=fields))

    # -------------------------------------------------------------------------
    # Profile and onboarding
    # -------------------------------------------------------------------------

    def mark_onboarding_complete(self) -> None:
        self._update(user_has_onboarded=True)
        self._logger.info("onboarding_completed")

    def set_username(self, name: str) -> None:
        self._update(username=name)

    def set_profile_picture(self, data_uri: str) -> None:
        self._update(profile_picture_data_uri=data_uri)

    def save_filter_preferences(self, filters: TransactionFilters) -> None:
        self._update(transaction_page_filters=filters)

    def reset_application_data(self) -> None:
        """
        Erase the stored document.

        The in-memory state is left as is; the consumer is expected to
        rebuild the application (a fresh AppState) afterwards.
        """
        self._store.reset()
        self._logger.info("application_data_reset")

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, data: TransactionDraft) -> Transaction:
        transaction = Transaction(id=str(uuid4()), **data.model_dump(exclude={"id"}))
        self._store.save(
            lambda prev: prev.model_copy(
                update={"transactions": [*prev.transactions, transaction]}
            )
        )
        self._logger.debug(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
        )
        return transaction

    def update_transaction(self, transaction: Transaction) -> None:
        """Replace the transaction with the same id. Unknown ids are ignored."""
        self._store.save(
            lambda prev: prev.model_copy(
                update={
                    "transactions": [
                        transaction if t.id == transaction.id else t
                        for t in prev.transactions
                    ]
                }
            )
        )

    def delete_transaction(self, transaction_id: str) -> None:
        self._store.save(
            lambda prev: prev.model_copy(
                update={
                    "transactions": [
                        t for t in prev.transactions if t.id != transaction_id
                    ]
                }
            )
        )

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, data: CategoryDraft) -> Category:
        """
        Create a category and return it.

        The returned id is usable immediately, without re-reading state.
        """
        category = Category(
            id=str(uuid4()),
            name=data.name,
            type=data.type,
            icon=data.icon or FALLBACK_CATEGORY_ICON,
        )
        self._store.save(
            lambda prev: prev.model_copy(
                update={"categories": [*prev.categories, category]}
            )
        )
        self._logger.debug("category_added", category_id=category.id)
        return category

    def update_category(self, category: Category) -> None:
        self._store.save(
            lambda prev: prev.model_copy(
                update={
                    "categories": [
                        category if c.id == category.id else c
                        for c in prev.categories
                    ]
                }
            )
        )

    def delete_category(self, category_id: str) -> None:
        """Remove a category. Transactions referencing it are left untouched."""
        self._store.save(
            lambda prev: prev.model_copy(
                update={
                    "categories": [
                        c for c in prev.categories if c.id != category_id
                    ]
                }
            )
        )

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_transactions_by_date(self, day: dt.date) -> list[Transaction]:
        target = _as_day(day)
        return [t for t in self.transactions if t.date == target]

    def get_transactions_for_month(self, day: dt.date) -> list[Transaction]:
        start, end = month_bounds(day)
        return [t for t in self.transactions if start <= t.date <= end]

    def get_monthly_summary(self, day: dt.date) -> MonthlySummary:
        monthly = self.get_transactions_for_month(day)
        income = sum(
            t.amount for t in monthly if t.type == TransactionType.INCOME
        )
        expenses = sum(
            t.amount for t in monthly if t.type == TransactionType.EXPENSE
        )
        return MonthlySummary(
            income=income,
            expenses=expenses,
            balance=income - expenses,
        )

    def get_monthly_expense_distribution(self, day: dt.date) -> list[ExpenseSlice]:
        """
        Expense totals per category for the month, in first-seen order.

        Each slice gets a color from its position so repeated calls
        render identically.
        """
        totals: dict[str, float] = {}
        for t in self.get_transactions_for_month(day):
            if t.type == TransactionType.EXPENSE:
                totals[t.category_id] = totals.get(t.category_id, 0) + t.amount

        slices = []
        for index, (category_id, amount) in enumerate(totals.items()):
            category = self.get_category_by_id(category_id)
            slices.append(
                ExpenseSlice(
                    category_id=category_id,
                    name=category.name if category else UNKNOWN_CATEGORY_NAME,
                    value=amount,
                    fill=slice_fill(index),
                )
            )
        return slices

    def get_unique_months_with_transactions(self) -> list[dt.date]:
        """First day of every month with a transaction, newest first."""
        months = {(t.date.year, t.date.month) for t in self.transactions}
        return [
            dt.date(year, month, 1)
            for year, month in sorted(months, reverse=True)
        ]
