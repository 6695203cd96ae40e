"""Static defaults: the storage key and the seeded category set."""

from snacker.models.finance import Category, StoredData, TransactionType


LOCAL_STORAGE_KEY = "snacker-app-data"

FALLBACK_CATEGORY_ICON = "Tag"

DEFAULT_INCOME_CATEGORIES: tuple[Category, ...] = (
    Category(id="salary", name="Salary", type=TransactionType.INCOME, icon="Briefcase"),
    Category(id="freelance", name="Freelance", type=TransactionType.INCOME, icon="Laptop"),
    Category(id="investment", name="Investment", type=TransactionType.INCOME, icon="TrendingUp"),
    Category(id="gift_income", name="Gift", type=TransactionType.INCOME, icon="Gift"),
    Category(id="other_income", name="Other", type=TransactionType.INCOME, icon="PlusCircle"),
)

DEFAULT_EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food & Drinks", type=TransactionType.EXPENSE, icon="Utensils"),
    Category(id="housing", name="Housing", type=TransactionType.EXPENSE, icon="Home"),
    Category(id="transport", name="Transport", type=TransactionType.EXPENSE, icon="Car"),
    Category(id="utilities", name="Utilities", type=TransactionType.EXPENSE, icon="Lightbulb"),
    Category(id="health", name="Health", type=TransactionType.EXPENSE, icon="HeartPulse"),
    Category(id="entertainment", name="Entertainment", type=TransactionType.EXPENSE, icon="Ticket"),
    Category(id="shopping", name="Shopping", type=TransactionType.EXPENSE, icon="ShoppingCart"),
    Category(id="education", name="Education", type=TransactionType.EXPENSE, icon="BookOpen"),
    Category(id="travel_expense", name="Travel", type=TransactionType.EXPENSE, icon="Plane"),
    Category(id="gift_expense", name="Gift", type=TransactionType.EXPENSE, icon="Gift"),
    Category(id="other_expense", name="Other", type=TransactionType.EXPENSE, icon="PlusCircle"),
)

ALL_DEFAULT_CATEGORIES: tuple[Category, ...] = (
    DEFAULT_INCOME_CATEGORIES + DEFAULT_EXPENSE_CATEGORIES
)


def initial_stored_data() -> StoredData:
    """Document used on first run and whenever storage has nothing usable."""
    return StoredData(
        transactions=[],
        categories=list(ALL_DEFAULT_CATEGORIES),
        user_has_onboarded=False,
    )
