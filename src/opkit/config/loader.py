"""YAML configuration file loading with Pydantic validation."""

import logging
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .models import ProjectConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Project configuration file, relative to the project root
DEFAULT_PROJECT_FILE = Path("PROJECT")


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML config file against a Pydantic model.

    Args:
        path: Path to the YAML configuration file.
        model_class: Pydantic model class to validate against.

    Returns:
        Validated configuration model instance.

    Raises:
        ConfigError: If validation fails.
    """
    data = load_yaml(path)
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def load_project_config(path: Path) -> ProjectConfig:
    """Load a project configuration file."""
    return load_config(path, ProjectConfig)


def find_project_config(path: Path | None = None, required: bool = False) -> ProjectConfig | None:
    """Load the project configuration if the file exists.

    Commands run outside a project (``init``, ``help``) have no file, which
    is not an error unless ``required`` is set, as it is for a file the user
    named explicitly.

    Raises:
        ConfigError: If ``required`` is set and the file does not exist.
    """
    path = path or DEFAULT_PROJECT_FILE
    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"No project configuration at {path}")
        return None
    config = load_project_config(path)
    logger.debug(
        f"Loaded project configuration {path}: version {config.version}, "
        f"layout {config.layout}"
    )
    return config
