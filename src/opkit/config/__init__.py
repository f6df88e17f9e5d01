"""Project configuration loading."""

from .loader import (
    DEFAULT_PROJECT_FILE,
    ConfigError,
    find_project_config,
    load_config,
    load_project_config,
    load_yaml,
)
from .models import ProjectConfig

__all__ = [
    "DEFAULT_PROJECT_FILE",
    "ConfigError",
    "ProjectConfig",
    "find_project_config",
    "load_config",
    "load_project_config",
    "load_yaml",
]
