"""Services package."""

from snacker.services.storage import (
    FileStorageBackend,
    InMemoryStorageBackend,
    LocalStore,
    QuotaExceededError,
    StorageBackend,
    StorageError,
    StorageUnavailableError,
    create_backend,
)

__all__ = [
    "FileStorageBackend",
    "InMemoryStorageBackend",
    "LocalStore",
    "QuotaExceededError",
    "StorageBackend",
    "StorageError",
    "StorageUnavailableError",
    "create_backend",
]
