"""
Abstract Storage Interface

DESIGN DECISION: The store adapter talks to a plain string key-value backend,
the same shape as a browser's local storage. This allows us to:
1. Persist to a directory of JSON files for normal use
2. Use in-memory storage for testing
3. Run with no backend at all (nothing is persisted)

Backends raise StorageError subclasses; the store adapter decides what is
fatal (nothing is).
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """
    Abstract key-value backend holding string values.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            QuotaExceededError: If the value does not fit
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete key. Removing an absent key is not an error.

        Raises:
            StorageError: If the removal fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """Value is larger than the backend allows."""
    pass


class StorageUnavailableError(StorageError):
    """Backend could not be reached or created."""
    pass
