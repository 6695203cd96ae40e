"""
Display helpers: currency text and category icons.

Icons are a closed set. Names stored on categories are resolved against it
and anything unknown (user typos, icons from older versions) falls back
to TAG.
"""

import math
import re
from enum import Enum
from typing import Optional

from snacker.models.finance import Category


UNCATEGORIZED_LABEL = "Uncategorized"

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)")


def format_currency(amount: float, symbol: str = "₱") -> str:
    """
    Format an amount with two decimals and thousands separators.

    >>> format_currency(-1234.5)
    '-₱1,234.50'
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def parse_currency(text: str) -> float:
    """
    Read a number back out of formatted text.

    Everything except digits, '.' and '-' is dropped first. Returns nan
    when no number is left.
    """
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return math.nan
    return float(match.group(0))


class CategoryIcon(str, Enum):
    """Icon symbols a category may reference."""
    BRIEFCASE = "Briefcase"
    LAPTOP = "Laptop"
    TRENDING_UP = "TrendingUp"
    GIFT = "Gift"
    PLUS_CIRCLE = "PlusCircle"
    UTENSILS = "Utensils"
    HOME = "Home"
    CAR = "Car"
    LIGHTBULB = "Lightbulb"
    HEART_PULSE = "HeartPulse"
    TICKET = "Ticket"
    SHOPPING_CART = "ShoppingCart"
    BOOK_OPEN = "BookOpen"
    PLANE = "Plane"
    TAG = "Tag"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    CategoryIcon.BRIEFCASE: "💼",
    CategoryIcon.LAPTOP: "💻",
    CategoryIcon.TRENDING_UP: "📈",
    CategoryIcon.GIFT: "🎁",
    CategoryIcon.PLUS_CIRCLE: "➕",
    CategoryIcon.UTENSILS: "🍴",
    CategoryIcon.HOME: "🏠",
    CategoryIcon.CAR: "🚗",
    CategoryIcon.LIGHTBULB: "💡",
    CategoryIcon.HEART_PULSE: "❤️",
    CategoryIcon.TICKET: "🎟️",
    CategoryIcon.SHOPPING_CART: "🛒",
    CategoryIcon.BOOK_OPEN: "📖",
    CategoryIcon.PLANE: "✈️",
    CategoryIcon.TAG: "🏷️",
}


def resolve_icon(name: Optional[str]) -> CategoryIcon:
    """Map a stored icon name to a known icon, falling back to TAG."""
    if not name:
        return CategoryIcon.TAG
    try:
        return CategoryIcon(name)
    except ValueError:
        return CategoryIcon.TAG


def category_label(category: Optional[Category]) -> str:
    """Name to show for a category lookup; dangling references included."""
    if category is None:
        return UNCATEGORIZED_LABEL
    return category.name
