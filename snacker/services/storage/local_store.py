"""
Persistent Store Adapter

Keeps exactly one JSON document under one key of a StorageBackend.

GUARANTEES:
- load/save/reset never raise for expected conditions
  (missing key, corrupt value, failed write, no backend)
- is_loading is True only until the first load() completes
- After save(), value reflects the intended document even if the
  write itself failed
"""

import json
from typing import Callable, Generic, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError

from snacker.services.storage.interface import StorageBackend, StorageError


DocumentT = TypeVar("DocumentT", bound=BaseModel)


class LocalStore(Generic[DocumentT]):
    """
    Serializes a pydantic document to a key-value backend.

    A backend of None means this environment has no storage: reads
    return the default and writes are skipped with a warning.
    """

    def __init__(
        self,
        backend: Optional[StorageBackend],
        key: str,
        default: DocumentT,
    ):
        self._backend = backend
        self._key = key
        self._default = default
        self._model = type(default)
        self._value: DocumentT = default
        self._is_loading = True
        self._logger = structlog.get_logger(__name__).bind(storage_key=key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def has_backend(self) -> bool:
        return self._backend is not None

    @property
    def is_loading(self) -> bool:
        """True until the first load() has completed."""
        return self._is_loading

    @property
    def value(self) -> DocumentT:
        """The current in-memory document."""
        return self._value

    def _read(self) -> DocumentT:
        if self._backend is None:
            return self._default

        try:
            raw = self._backend.get_item(self._key)
        except StorageError as e:
            self._logger.warning("storage_read_failed", error=str(e))
            return self._default

        if raw is None:
            return self._default

        try:
            payload = json.loads(raw)
        except ValueError as e:
            self._logger.warning("storage_parse_failed", error=str(e))
            return self._default

        try:
            return self._model.model_validate(payload)
        except ValidationError as e:
            self._logger.warning(
                "storage_document_invalid",
                error_count=e.error_count(),
                error=str(e),
            )
            return self._default

    def load(self) -> DocumentT:
        """
        Read the document from the backend.

        Falls back to the default when the key is absent, the value is
        corrupt, or there is no backend.
        """
        self._value = self._read()
        self._is_loading = False
        return self._value

    def save(
        self,
        document: Union[DocumentT, Callable[[DocumentT], DocumentT]],
    ) -> None:
        """
        Replace the document and write it under the key.

        Args:
            document: The new document, or a function that receives the
                      current document and returns the new one
        """
        if self._backend is None:
            self._logger.warning("storage_unavailable_write_skipped")
            return

        new_value = document(self._value) if callable(document) else document
        self._value = new_value

        try:
            serialized = new_value.model_dump_json(by_alias=True, exclude_none=True)
            self._backend.set_item(self._key, serialized)
        except (StorageError, ValueError) as e:
            self._logger.warning(
                "storage_write_failed",
                error_type=type(e).__name__,
                error=str(e),
            )

    def reset(self) -> None:
        """Delete the stored document. The next load() returns the default."""
        if self._backend is None:
            self._logger.warning("storage_unavailable_reset_skipped")
            return

        try:
            self._backend.remove_item(self._key)
        except StorageError as e:
            self._logger.warning("storage_reset_failed", error=str(e))
            return

        self._logger.info("storage_reset")
