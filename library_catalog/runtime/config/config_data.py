"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import make_url


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str = Field(
        default="", description="Log file path (empty disables the file sink)"
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./library.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo emitted SQL statements")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return make_url(self.url).get_backend_name() == "sqlite"

    @computed_field
    @property
    def is_memory(self) -> bool:
        """Whether the configured database is an in-memory SQLite database."""
        url = make_url(self.url)
        return self.is_sqlite and url.database in (None, "", ":memory:")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string."""
        url = make_url(self.url)
        if url.password and url.get_backend_name() != "sqlite":
            logger.debug("Database URL carries an inline password")
        return url.render_as_string(hide_password=False)


class CatalogConfig(BaseModel):
    """Catalog browsing configuration."""

    page_size: int = Field(default=10, ge=1, description="Books shown per list page")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    title: str = Field(default="Library Manager", description="Site title")
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
