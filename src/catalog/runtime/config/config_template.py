"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.catalog.runtime.config.config_data import ConfigData


# ${NAME}, ${NAME:-default} or ${NAME:?message}
_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")


def substitute_env_vars(text: str) -> str:
    """Replace ``${...}`` placeholders in ``text`` with environment values.

    ``${NAME}`` and ``${NAME:?message}`` are required and raise ``ValueError``
    when ``NAME`` is unset; ``${NAME:-default}`` falls back to ``default``.
    """

    def resolve(match: re.Match[str]) -> str:
        name, op, arg = match.group("name", "op", "arg")
        value = os.getenv(name)
        if value is not None:
            return value
        if op == ":-":
            return arg
        if op == ":?":
            raise ValueError(f"Required environment variable {name}: {arg}")
        raise ValueError(f"Required environment variable {name} not set")

    return _PLACEHOLDER.sub(resolve, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``<ENV>_FOO`` variables to ``FOO`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    env_variables = [(var, value) for var, value in os.environ.items() if var.startswith(prefix)]
    if env_variables:
        logger.info(
            "Applying environment-specific overrides: {}",
            [name for name, _ in env_variables],
        )

    for var_name, var_value in env_variables:
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        logger.debug(f"Set environment variable {new_var_name} from {var_name}")


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Full-line comments are left as written, so they may mention placeholders.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed configuration with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            configuration does not validate
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info(f"Loading configuration for environment: {env_mode}")
    apply_environment_overrides(env_mode)

    substituted_content = "\n".join(
        line if line.lstrip().startswith("#") else substitute_env_vars(line)
        for line in content.splitlines()
    )

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        # Settings live under the top-level 'config' key
        config_data = loaded.get('config', {})
        config = ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if config.catalog.isbn_checker.enabled:
        logger.info("ISBN checker enabled at {}", config.catalog.isbn_checker.base_url)
    if config.catalog.notifier.enabled:
        logger.info("Email notifier enabled at {}", config.catalog.notifier.base_url)

    return config


def load_config(file_path: Path) -> ConfigData:
    """Load configuration from ``file_path``, falling back to defaults when absent."""
    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
