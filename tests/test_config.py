"""Tests for settings loading."""

from pathlib import Path

import pytest

from snacker.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("BACKEND", "DATA_DIR", "STORAGE_KEY", "MAX_BYTES"):
            monkeypatch.delenv(f"SNACKER_STORAGE_{name}", raising=False)
        settings = StorageSettings()
        assert settings.backend == "file"
        assert settings.data_dir == Path(".snacker")
        assert settings.storage_key == "snacker-app-data"
        assert settings.max_bytes is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test the SNACKER_STORAGE_ prefix."""
        monkeypatch.setenv("SNACKER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("SNACKER_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SNACKER_STORAGE_MAX_BYTES", "5000")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.data_dir == tmp_path
        assert settings.max_bytes == 5000

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            StorageSettings(backend="cloud")

    def test_storage_key_cannot_be_a_path(self):
        """Test that keys with separators are rejected."""
        with pytest.raises(ValueError, match="Invalid storage key"):
            StorageSettings(storage_key="../elsewhere")


class TestAppSettings:
    """Tests for AppSettings."""

    def test_log_level_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            AppSettings(log_level="chatty")

    def test_currency_symbol_from_environment(self, monkeypatch):
        monkeypatch.setenv("SNACKER_CURRENCY_SYMBOL", "$")
        assert AppSettings().currency_symbol == "$"


class TestSettingsRoot:
    """Tests for get_settings and validate_all_settings."""

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("SNACKER_STORAGE_BACKEND", "memory")
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_validate_reports_errors(self, monkeypatch):
        """Test that a bad value is reported rather than raised."""
        monkeypatch.setenv("SNACKER_STORAGE_BACKEND", "cloud")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["app"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
