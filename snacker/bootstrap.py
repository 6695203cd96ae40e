"""
Application wiring

Builds the storage backend from configuration, loads the stored document
and returns an initialized AppState. This is the only place that reads
settings for the core.
"""

from typing import Optional

import structlog

from snacker.config import Settings, get_settings
from snacker.log import configure_logging
from snacker.models.defaults import initial_stored_data
from snacker.services.storage import LocalStore, StorageBackend, create_backend
from snacker.state import AppState


def create_app_state(
    settings: Optional[Settings] = None,
    backend: Optional[StorageBackend] = None,
) -> AppState:
    """
    Factory function to create the application state.

    Args:
        settings: Settings to use. Defaults to get_settings().
        backend: Backend override (tests). When omitted, the backend
                 named by storage settings is created.

    Returns:
        An AppState whose initialization has completed
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, json_output=app_settings.log_json)
    logger = structlog.get_logger(__name__)

    if backend is None:
        backend = create_backend(storage_settings)

    store = LocalStore(backend, storage_settings.storage_key, initial_stored_data())
    state = AppState(store)
    state.initialize()

    logger.info(
        "app_state_ready",
        environment=app_settings.app_environment,
        transactions=len(state.transactions),
        categories=len(state.categories),
    )
    return state
