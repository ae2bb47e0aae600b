# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from eden_academy.core.config.settings import (
    APISettings,
    CORSSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = StorageSettings()

        assert settings.backend == "json"
        assert settings.data_dir == Path("data")
        assert settings.database_url == "sqlite+aiosqlite:///./data/eden_academy.db"
        assert settings.echo is False

    def test_loads_from_environment(self) -> None:
        """Test loading settings from environment variables."""
        env = {
            "STORAGE_BACKEND": "database",
            "STORAGE_DATA_DIR": "/srv/academy",
            "STORAGE_DATABASE_URL": "sqlite+aiosqlite:////tmp/curation.db",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = StorageSettings()

        assert settings.backend == "database"
        assert settings.data_dir == Path("/srv/academy")
        assert settings.database_url == "sqlite+aiosqlite:////tmp/curation.db"

    def test_unknown_backend_rejected(self) -> None:
        """Test that only known backends are accepted."""
        with patch.dict(os.environ, {"STORAGE_BACKEND": "redis"}, clear=False):
            with pytest.raises(ValueError):
                StorageSettings()


class TestCORSSettings:
    """Tests for CORSSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = CORSSettings()

        assert settings.origins == "http://localhost:3000"
        assert settings.allow_credentials is True

    def test_origins_list_property(self) -> None:
        """Test origins_list property parses comma-separated origins."""
        settings = CORSSettings(origins="http://localhost:3000, https://eden.art,")

        assert settings.origins_list == ["http://localhost:3000", "https://eden.art"]


class TestAPISettings:
    """Tests for APISettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = APISettings()

        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.workers == 1
        assert settings.reload is False


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is True
        assert settings.log_level == "INFO"

    def test_production_with_debug_raises_error(self) -> None:
        """Test that production environment with debug enabled raises error."""
        with pytest.raises(ValueError) as exc_info:
            Settings(environment="production", debug=True)

        assert "Debug mode must be disabled in production" in str(exc_info.value)

    def test_production_without_debug_succeeds(self) -> None:
        """Test that production environment with debug disabled works."""
        settings = Settings(environment="production", debug=False)

        assert settings.environment == "production"

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.storage, StorageSettings)
        assert isinstance(settings.cors, CORSSettings)
        assert isinstance(settings.api, APISettings)

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production", debug=False)

        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production", debug=False)

        assert dev_settings.is_production is False
        assert prod_settings.is_production is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert isinstance(settings1, Settings)
        assert settings1 is settings2

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache allows reloading settings."""
        settings1 = get_settings()
        clear_settings_cache()

        with patch.dict(os.environ, {"STORAGE_BACKEND": "database"}, clear=False):
            settings2 = get_settings()

        assert settings1 is not settings2
        assert settings2.storage.backend == "database"
