"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL, make_url


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(
        default=["Origin", "Content-Type", "Authorization"]
    )
    expose_headers: list[str] = Field(default=["Content-Length"])
    max_age: int = Field(
        default=12 * 60 * 60, description="Preflight cache duration in seconds"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str | None = Field(
        default=None,
        description="Full connection URL; overrides the individual fields when set",
    )
    driver: str = Field(default="mysql+pymysql", description="SQLAlchemy dialect+driver")
    user: str = Field(default="root", description="Database username")
    password: str | None = Field(default=None, description="Database password")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=3306, description="Database port")
    name: str = Field(default="books", description="Database name")
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string.

        An explicit ``url`` is used verbatim. Otherwise the URL is assembled from
        the individual fields, keeping the password unmasked so that it can be
        handed straight to ``create_engine``.
        """
        if self.url:
            return self.url

        url = URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def backend(self) -> str:
        """Name of the database backend, e.g. ``mysql`` or ``sqlite``."""
        return make_url(self.connection_string).get_backend_name()


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=5000, description="Application port")
    create_tables: bool = Field(
        default=True, description="Create the books table at startup if missing"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


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
