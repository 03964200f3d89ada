"""Environment-based settings.

Simple primitive values read from the process environment, after an optional
``.env`` file has been loaded into it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.books_api.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
)


def load_env_file(path: Path = Path(".env")) -> bool:
    """Load variables from a local ``.env`` file into ``os.environ``.

    Variables already present in the environment win. A missing file is not an
    error: the system environment is used as-is.
    """
    if not path.is_file():
        logger.warning(
            "Could not load {} file, using system environment variables", path
        )
        return False

    load_dotenv(path, override=False)
    logger.info("Loaded environment variables from {}", path)
    return True


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    port: int = Field(default=5000, validation_alias="PORT")

    # Database
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
    db_user: str = Field(default="root", validation_alias="DB_USER")
    db_password: str | None = Field(default=None, validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=3306, validation_alias="DB_PORT")
    db_name: str = Field(default="books", validation_alias="DB_NAME")

    def to_config(self) -> ConfigData:
        """Build the application configuration from these variables."""
        return ConfigData(
            app=AppConfig(environment=self.environment, port=self.port),
            logging=LoggingConfig(level=self.log_level),
            database=DatabaseConfig(
                url=self.database_url,
                user=self.db_user,
                password=self.db_password,
                host=self.db_host,
                port=self.db_port,
                name=self.db_name,
            ),
        )
