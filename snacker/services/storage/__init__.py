"""
Storage Services Package

Provides the key-value backend interface, its implementations, and the
store adapter that keeps the application's single document in a backend.
"""

from snacker.services.storage.interface import (
    QuotaExceededError,
    StorageBackend,
    StorageError,
    StorageUnavailableError,
)
from snacker.services.storage.backends import (
    FileStorageBackend,
    InMemoryStorageBackend,
    create_backend,
)
from snacker.services.storage.local_store import LocalStore

__all__ = [
    # Interfaces
    "StorageBackend",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "FileStorageBackend",
    "InMemoryStorageBackend",
    "LocalStore",
    "create_backend",
]
