"""Unit tests for configuration models."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.catalog.runtime.config.config_data import (
    AppConfig,
    CatalogConfig,
    ConfigData,
    DatabaseConfig,
    IsbnCheckerConfig,
)


class TestDatabaseConfig:
    def test_sqlite_url_used_as_is(self):
        config = DatabaseConfig(url="sqlite:///./catalog.db")

        assert config.is_sqlite is True
        assert config.connection_string == "sqlite:///./catalog.db"

    def test_password_from_environment(self):
        config = DatabaseConfig(
            url="postgresql://catalog@db:5432/catalog",
            password_env_var="CATALOG_DB_PASSWORD",
        )

        with patch.dict(os.environ, {"CATALOG_DB_PASSWORD": "s3cret"}):
            assert config.password == "s3cret"
            assert config.connection_string == "postgresql://catalog:s3cret@db:5432/catalog"

    def test_password_from_file(self, tmp_path):
        secret = tmp_path / "db_password"
        secret.write_text("from-file\n")
        config = DatabaseConfig(
            url="postgresql://catalog@db:5432/catalog",
            password_file=str(secret),
        )

        assert config.password == "from-file"

    def test_password_in_url_wins(self):
        config = DatabaseConfig(
            url="postgresql://catalog:inline@db:5432/catalog",
            password_env_var="CATALOG_DB_PASSWORD",
        )

        with patch.dict(os.environ, {"CATALOG_DB_PASSWORD": "ignored"}):
            assert config.password == "inline"

    def test_missing_password_env_var_is_none(self):
        config = DatabaseConfig(
            url="postgresql://catalog@db:5432/catalog",
            password_env_var="CATALOG_DB_PASSWORD",
        )

        with patch.dict(os.environ, {}, clear=True):
            assert config.password is None


class TestCatalogConfig:
    def test_defaults(self):
        config = CatalogConfig()

        assert config.storage == "memory"
        assert config.isbn_checker.enabled is False
        assert config.notifier.enabled is False

    def test_unknown_storage_rejected(self):
        with pytest.raises(ValidationError):
            CatalogConfig(storage="redis")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            IsbnCheckerConfig(timeout_seconds=0)


class TestAppConfig:
    def test_base_url(self):
        assert AppConfig(host="api", port=8080).base_url == "http://api:8080"
        assert (
            AppConfig(environment="production", host="api", port=443).base_url
            == "https://api:443"
        )

    def test_root_defaults(self):
        config = ConfigData()

        assert config.app.environment == "development"
        assert config.logging.file is None
