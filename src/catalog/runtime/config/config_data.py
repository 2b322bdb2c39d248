"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, model_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """Get the database password from the appropriate source.

        A password embedded in the URL wins. Otherwise the secrets file is read,
        then the environment variable named by ``password_env_var``.
        """
        from sqlalchemy.engine import make_url

        url_obj = make_url(self.url)
        if url_obj.password:
            return url_obj.password

        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            import os

            password = os.getenv(self.password_env_var)
            if password:
                return password
            logger.warning("Environment variable {} not set", self.password_env_var)

        return None

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        if self.is_sqlite:
            return self.url

        base_url = make_url(self.url)
        if base_url.password:
            return base_url.render_as_string(hide_password=False)

        resolved_password = self.password
        if resolved_password:
            return base_url.set(password=resolved_password).render_as_string(
                hide_password=False
            )

        logger.warning("No database password configured for {}", base_url.host)
        return base_url.render_as_string(hide_password=False)


class IsbnCheckerConfig(BaseModel):
    """External ISBN checker configuration."""

    enabled: bool = Field(default=False, description="Validate ISBNs before create")
    base_url: str = Field(
        default="http://localhost:8081", description="ISBN checker host"
    )
    timeout_seconds: float = Field(
        default=5.0, gt=0, description="Timeout for a single check call"
    )


class NotifierConfig(BaseModel):
    """External email notifier configuration."""

    enabled: bool = Field(default=False, description="Send a notice after create")
    base_url: str = Field(
        default="http://localhost:8082", description="Email service host"
    )
    recipient: str = Field(
        default="catalog@example.com", description="Address receiving creation notices"
    )
    timeout_seconds: float = Field(
        default=5.0, gt=0, description="Timeout for a single notification call"
    )


class CatalogConfig(BaseModel):
    """Book catalog configuration."""

    storage: Literal["memory", "database"] = Field(
        default="memory", description="Book store backend"
    )
    isbn_checker: IsbnCheckerConfig = Field(
        default_factory=IsbnCheckerConfig, description="ISBN checker collaborator"
    )
    notifier: NotifierConfig = Field(
        default_factory=NotifierConfig, description="Email notifier collaborator"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )

    @model_validator(mode="after")
    def _warn_on_sqlite_in_production(self) -> ConfigData:
        if (
            self.app.environment == "production"
            and self.catalog.storage == "database"
            and self.database.is_sqlite
        ):
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )
        return self
