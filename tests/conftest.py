"""Shared fixtures: an in-memory backend, a store on it, and a ready AppState."""

import pytest

from snacker.config import get_settings
from snacker.models import LOCAL_STORAGE_KEY, StoredData, initial_stored_data
from snacker.services.storage import InMemoryStorageBackend, LocalStore
from snacker.state import AppState


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend() -> InMemoryStorageBackend:
    return InMemoryStorageBackend()


@pytest.fixture
def store(backend) -> LocalStore[StoredData]:
    return LocalStore(backend, LOCAL_STORAGE_KEY, initial_stored_data())


@pytest.fixture
def state(store) -> AppState:
    app_state = AppState(store)
    app_state.initialize()
    return app_state
