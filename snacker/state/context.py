"""
State injection scope

The application state is created once and handed to consumers explicitly.
provide_app_state() binds it for the current context; use_app_state()
retrieves it and fails loudly outside that scope.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from snacker.state.app_state import AppState


_current_state: ContextVar[Optional[AppState]] = ContextVar(
    "snacker_app_state", default=None
)


class AppStateNotProvidedError(RuntimeError):
    """use_app_state() was called outside provide_app_state()."""
    pass


@contextmanager
def provide_app_state(state: AppState) -> Iterator[AppState]:
    """Make state available to use_app_state() inside the with-block."""
    token = _current_state.set(state)
    try:
        yield state
    finally:
        _current_state.reset(token)


def use_app_state() -> AppState:
    state = _current_state.get()
    if state is None:
        raise AppStateNotProvidedError(
            "use_app_state must be used within provide_app_state"
        )
    return state
