"""Tests for storage backends and the LocalStore adapter."""

import json
from datetime import date, datetime
from typing import Optional

import pytest
from structlog.testing import capture_logs

from snacker.config import StorageSettings
from snacker.models import (
    LOCAL_STORAGE_KEY,
    Category,
    StoredData,
    Transaction,
    TransactionFilters,
    TransactionType,
    initial_stored_data,
)
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


class BrokenBackend(StorageBackend):
    """Backend whose every operation fails."""

    def get_item(self, key: str) -> Optional[str]:
        raise StorageError("disk unplugged")

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("disk unplugged")

    def remove_item(self, key: str) -> None:
        raise StorageError("disk unplugged")


def full_document() -> StoredData:
    """A document with every optional field populated."""
    return StoredData(
        transactions=[
            Transaction(
                id="t1",
                type=TransactionType.EXPENSE,
                amount=42.5,
                category_id="snacks",
                date=date(2024, 3, 15),
                notes="Chips",
                is_favorite=True,
            ),
        ],
        categories=[
            Category(id="snacks", name="Snacks", type=TransactionType.EXPENSE, icon="Utensils"),
        ],
        user_has_onboarded=True,
        username="Ada",
        profile_picture_data_uri="data:image/png;base64,iVBORw0KGgo=",
        transaction_page_filters=TransactionFilters(
            type="expense",
            category_id="snacks",
            date_from=datetime(2024, 3, 1),
            date_to=datetime(2024, 3, 31, 23, 59, 59),
            search_term="chips",
        ),
    )


def events(logs: list[dict]) -> list[str]:
    return [entry["event"] for entry in logs]


class TestInMemoryBackend:
    """Tests for InMemoryStorageBackend."""

    def test_set_get_remove(self):
        """Test the basic key-value cycle."""
        backend = InMemoryStorageBackend()
        assert backend.get_item("k") is None
        backend.set_item("k", "v")
        assert backend.get_item("k") == "v"
        backend.remove_item("k")
        assert backend.get_item("k") is None

    def test_remove_absent_key(self):
        """Test that removing a missing key is not an error."""
        InMemoryStorageBackend().remove_item("missing")

    def test_quota(self):
        """Test that values over the quota are rejected."""
        backend = InMemoryStorageBackend(max_bytes=4)
        backend.set_item("k", "abcd")
        with pytest.raises(QuotaExceededError):
            backend.set_item("k", "abcde")
        assert backend.get_item("k") == "abcd"


class TestFileBackend:
    """Tests for FileStorageBackend."""

    def test_round_trip(self, tmp_path):
        """Test that a value survives a new backend instance."""
        FileStorageBackend(tmp_path / "data").set_item("snacker-app-data", '{"a": 1}')
        again = FileStorageBackend(tmp_path / "data")
        assert again.get_item("snacker-app-data") == '{"a": 1}'
        assert (tmp_path / "data" / "snacker-app-data.json").exists()

    def test_missing_key(self, tmp_path):
        """Test reading a key that was never written."""
        assert FileStorageBackend(tmp_path).get_item("nothing") is None

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        """Test that atomic writes clean up after themselves."""
        backend = FileStorageBackend(tmp_path)
        backend.set_item("k", "one")
        backend.set_item("k", "two")
        assert backend.get_item("k") == "two"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]

    def test_remove(self, tmp_path):
        """Test removing present and absent keys."""
        backend = FileStorageBackend(tmp_path)
        backend.set_item("k", "v")
        backend.remove_item("k")
        backend.remove_item("k")
        assert backend.get_item("k") is None

    def test_rejects_path_like_keys(self, tmp_path):
        """Test that keys cannot escape the data directory."""
        with pytest.raises(StorageError):
            FileStorageBackend(tmp_path).set_item("../escape", "v")

    def test_quota(self, tmp_path):
        """Test the optional size quota."""
        backend = FileStorageBackend(tmp_path, max_bytes=3)
        with pytest.raises(QuotaExceededError):
            backend.set_item("k", "four")
        assert backend.get_item("k") is None


class TestCreateBackend:
    """Tests for building a backend from settings."""

    def test_file_backend(self, tmp_path):
        settings = StorageSettings(backend="file", data_dir=tmp_path)
        backend = create_backend(settings)
        assert isinstance(backend, FileStorageBackend)
        assert backend.directory == tmp_path

    def test_memory_backend(self):
        assert isinstance(
            create_backend(StorageSettings(backend="memory")),
            InMemoryStorageBackend,
        )

    def test_none_is_not_a_backend(self):
        """Test that persistence cannot be switched off by configuration."""
        with pytest.raises(ValueError):
            StorageSettings(backend="none")

    def test_unknown_backend_name_raises(self):
        settings = StorageSettings.model_construct(backend="cloud")
        with pytest.raises(StorageUnavailableError):
            create_backend(settings)


class TestLocalStoreLoad:
    """Tests for LocalStore.load."""

    def test_is_loading_until_first_load(self, store):
        """Test the one-way loading flag."""
        assert store.is_loading is True
        store.load()
        assert store.is_loading is False
        store.load()
        assert store.is_loading is False

    def test_absent_key_returns_default(self, store):
        """Test first-run behaviour."""
        data = store.load()
        assert data == initial_stored_data()
        assert data.user_has_onboarded is False

    def test_no_backend_returns_default(self):
        """Test an environment without storage."""
        store = LocalStore(None, LOCAL_STORAGE_KEY, initial_stored_data())
        assert store.load() == initial_stored_data()
        assert store.is_loading is False

    def test_corrupt_json_returns_default(self, backend):
        """Test that invalid JSON is treated as absent and logged."""
        backend.set_item(LOCAL_STORAGE_KEY, "{not json")
        with capture_logs() as logs:
            store = LocalStore(backend, LOCAL_STORAGE_KEY, initial_stored_data())
            data = store.load()

        assert data == initial_stored_data()
        assert "storage_parse_failed" in events(logs)
        assert logs[0]["log_level"] == "warning"
        # corrupt value is left alone
        assert backend.get_item(LOCAL_STORAGE_KEY) == "{not json"

    def test_invalid_document_returns_default(self, backend):
        """Test that well-formed JSON with the wrong shape falls back too."""
        backend.set_item(LOCAL_STORAGE_KEY, json.dumps({"transactions": "nope"}))
        with capture_logs() as logs:
            store = LocalStore(backend, LOCAL_STORAGE_KEY, initial_stored_data())
            data = store.load()

        assert data == initial_stored_data()
        assert "storage_document_invalid" in events(logs)

    def test_read_error_returns_default(self):
        """Test that a failing backend read is not raised."""
        with capture_logs() as logs:
            store = LocalStore(BrokenBackend(), LOCAL_STORAGE_KEY, initial_stored_data())
            data = store.load()

        assert data == initial_stored_data()
        assert "storage_read_failed" in events(logs)

    def test_load_is_idempotent(self, backend, store):
        """Test that two loads without a save yield identical documents."""
        store.save(full_document())
        first = store.load()
        second = store.load()
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()


class TestLocalStoreSave:
    """Tests for LocalStore.save and reset."""

    def test_round_trip(self, backend, store):
        """Test that save followed by load gives back the same document."""
        document = full_document()
        store.save(document)
        assert store.load() == document

        fresh = LocalStore(backend, LOCAL_STORAGE_KEY, initial_stored_data())
        assert fresh.load() == document

    def test_round_trip_through_files(self, tmp_path):
        """Test the round trip on the file backend."""
        document = full_document()
        LocalStore(FileStorageBackend(tmp_path), LOCAL_STORAGE_KEY, initial_stored_data()).save(document)
        fresh = LocalStore(FileStorageBackend(tmp_path), LOCAL_STORAGE_KEY, initial_stored_data())
        assert fresh.load() == document

    def test_writes_wire_format(self, backend, store):
        """Test the persisted JSON layout."""
        store.save(full_document())
        raw = json.loads(backend.get_item(LOCAL_STORAGE_KEY))
        assert raw["userHasOnboarded"] is True
        assert raw["profilePictureDataUri"].startswith("data:image/png")
        assert raw["transactions"][0]["categoryId"] == "snacks"
        assert raw["transactions"][0]["date"] == "2024-03-15"
        assert raw["transactionPageFilters"]["searchTerm"] == "chips"

    def test_save_with_updater(self, store):
        """Test the functional update form."""
        store.load()
        store.save(lambda prev: prev.model_copy(update={"username": "Ada"}))
        assert store.value.username == "Ada"
        assert store.load().username == "Ada"

    def test_write_failure_keeps_in_memory_value(self):
        """Test that a quota error is logged and the value still changes."""
        backend = InMemoryStorageBackend(max_bytes=10)
        with capture_logs() as logs:
            store = LocalStore(backend, LOCAL_STORAGE_KEY, initial_stored_data())
            store.load()
            store.save(full_document())

        assert store.value == full_document()
        assert backend.get_item(LOCAL_STORAGE_KEY) is None
        failure = next(e for e in logs if e["event"] == "storage_write_failed")
        assert failure["error_type"] == "QuotaExceededError"

    def test_no_backend_skips_write(self):
        """Test that saving without storage is a logged no-op."""
        with capture_logs() as logs:
            store = LocalStore(None, LOCAL_STORAGE_KEY, initial_stored_data())
            store.load()
            store.save(full_document())

        assert store.value == initial_stored_data()
        assert "storage_unavailable_write_skipped" in events(logs)

    def test_reset_removes_document(self, backend, store):
        """Test that reset deletes the key and load falls back."""
        store.save(full_document())
        store.reset()
        assert backend.get_item(LOCAL_STORAGE_KEY) is None
        assert store.load() == initial_stored_data()

    def test_reset_failure_is_logged(self):
        """Test that a failing removal does not raise."""
        with capture_logs() as logs:
            LocalStore(BrokenBackend(), LOCAL_STORAGE_KEY, initial_stored_data()).reset()
        assert "storage_reset_failed" in events(logs)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
