"""Application state package."""

from snacker.state.app_state import (
    AppState,
    merge_default_categories,
    month_bounds,
    slice_fill,
)
from snacker.state.context import (
    AppStateNotProvidedError,
    provide_app_state,
    use_app_state,
)

__all__ = [
    "AppState",
    "AppStateNotProvidedError",
    "merge_default_categories",
    "month_bounds",
    "provide_app_state",
    "slice_fill",
    "use_app_state",
]
