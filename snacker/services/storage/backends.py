"""
Storage Backends

FileStorageBackend keeps one <key>.json file per key in a data directory.
InMemoryStorageBackend keeps values in a dict and is used by tests.

TRADEOFFS:
- One writer per data directory (no file locking)
- Whole values only; no partial updates
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from snacker.config.settings import StorageSettings
from snacker.services.storage.interface import (
    QuotaExceededError,
    StorageBackend,
    StorageError,
    StorageUnavailableError,
)


def _check_quota(key: str, value: str, max_bytes: Optional[int]) -> None:
    if max_bytes is None:
        return
    size = len(value.encode("utf-8"))
    if size > max_bytes:
        raise QuotaExceededError(
            f"Value for {key!r} is {size} bytes; quota is {max_bytes} bytes"
        )


class InMemoryStorageBackend(StorageBackend):
    """Dict-backed backend. Contents live as long as the instance."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        max_bytes: Optional[int] = None,
    ):
        self._items: dict[str, str] = dict(initial or {})
        self._max_bytes = max_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self._max_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently stored."""
        return list(self._items)


class FileStorageBackend(StorageBackend):
    """
    Directory-of-files backend.

    Writes go to a temporary file in the same directory and are moved
    into place with os.replace, so a reader never sees a half-written value.
    """

    SUFFIX = ".json"

    def __init__(self, directory: Path | str, max_bytes: Optional[int] = None):
        self._directory = Path(directory)
        self._max_bytes = max_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        _check_quota(key, value, self._max_bytes)

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot create data directory {self._directory}: {e}"
            ) from e

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._directory,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e


def create_backend(settings: StorageSettings) -> StorageBackend:
    """Build the backend named by configuration."""
    if settings.backend == "file":
        return FileStorageBackend(settings.data_dir, max_bytes=settings.max_bytes)
    if settings.backend == "memory":
        return InMemoryStorageBackend(max_bytes=settings.max_bytes)
    raise StorageUnavailableError(f"Unknown storage backend: {settings.backend!r}")
