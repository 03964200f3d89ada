"""Configuration loading with environment variable templating."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.books_api.runtime.config.config_data import ConfigData
from src.books_api.runtime.config.settings import EnvironmentVariables, load_env_file

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """

    def replacer(match: re.Match) -> str:
        expression = match.group(1)

        if ":-" in expression:
            name, default = expression.split(":-", 1)
            return os.getenv(name, default)

        if ":?" in expression:
            name, message = expression.split(":?", 1)
            value = os.getenv(name)
            if value is None:
                raise ValueError(f"Required environment variable {name}: {message}")
            return value

        value = os.getenv(expression)
        if value is None:
            raise ValueError(f"Required environment variable {expression} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Promote ``<ENV>_NAME`` variables to ``NAME`` for the active environment.

    With ``APP_ENVIRONMENT=production``, ``PRODUCTION_DB_HOST`` becomes ``DB_HOST``.
    """
    prefix = f"{env_mode.upper()}_"
    overrides = [(var, value) for var, value in os.environ.items() if var.startswith(prefix)]
    if overrides:
        logger.info(
            "Applying {} environment-specific overrides: {}",
            env_mode,
            [var for var, _ in overrides],
        )

    for var_name, var_value in overrides:
        os.environ[var_name[len(prefix):]] = var_value
        logger.debug("Set environment variable {} from {}", var_name[len(prefix):], var_name)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Validated configuration taken from the top-level ``config`` section

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    content = file_path.read_text(encoding="utf-8")

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_overrides(env_mode)

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError(f"Configuration file {file_path} is empty")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(
    config_path: Path = Path("config.yaml"), env_path: Path = Path(".env")
) -> ConfigData:
    """Load the application configuration.

    The ``.env`` file is applied first. ``config.yaml`` is used when present;
    otherwise the configuration is read straight from environment variables.
    """
    load_env_file(env_path)

    if config_path.is_file():
        return load_templated_yaml(config_path)

    logger.info("{} not found, reading configuration from the environment", config_path)
    return EnvironmentVariables().to_config()
