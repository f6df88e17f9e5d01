"""Built-in plugins and external plugin discovery."""

from .builtin import DEFAULT_PROJECT_VERSION, builtin_plugins, default_registry
from .discovery import discover_external_plugins

__all__ = [
    "DEFAULT_PROJECT_VERSION",
    "builtin_plugins",
    "default_registry",
    "discover_external_plugins",
]
