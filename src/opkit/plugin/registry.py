"""In-memory plugin registry."""

import logging
from typing import Iterator

from .errors import (
    DuplicateKeyError,
    RegistryFrozenError,
    UnknownFullyQualifiedPluginError,
    UnsupportedProjectVersionError,
)
from .plugin import Plugin, supports_project_version, validate_plugin
from .version import Version

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Registry of plugins keyed by their fully qualified key.

    A registry is built once per CLI invocation, then frozen and handed to
    the resolver. It also records which plugins to use for each project
    version when the user does not name any.
    """

    def __init__(self, *plugins: Plugin) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._defaults: dict[Version, list[str]] = {}
        self._frozen = False
        self.register(*plugins)

    def register(self, *plugins: Plugin) -> None:
        """Validate and add plugins.

        The whole batch is checked first; if any plugin is rejected none of
        them are added.

        Raises:
            DuplicateKeyError: If a plugin key is already registered or
                repeated within ``plugins``.
            RegistryFrozenError: If the registry has been frozen.
        """
        batch: dict[str, Plugin] = {}
        for plugin in plugins:
            plugin_key = plugin.key
            if self._frozen:
                raise RegistryFrozenError(plugin_key)
            validate_plugin(plugin)
            if plugin_key in self._plugins or plugin_key in batch:
                raise DuplicateKeyError(plugin_key)
            batch[plugin_key] = plugin

        self._plugins.update(batch)
        for plugin_key in batch:
            logger.debug(f"Registered plugin {plugin_key}")

    def set_default_plugins(self, project_version: Version, *plugins: Plugin) -> None:
        """Record the plugins used for ``project_version`` when none are requested.

        Raises:
            UnknownFullyQualifiedPluginError: If a plugin is not registered.
            UnsupportedProjectVersionError: If a plugin does not support
                ``project_version``.
        """
        if self._frozen:
            raise RegistryFrozenError(str(project_version))
        project_version.validate()
        keys = []
        for plugin in plugins:
            if plugin.key not in self._plugins:
                raise UnknownFullyQualifiedPluginError(plugin.key)
            if not supports_project_version(plugin, project_version):
                raise UnsupportedProjectVersionError(
                    plugin.key,
                    str(project_version),
                    [str(v) for v in plugin.supported_project_versions],
                )
            keys.append(plugin.key)
        self._defaults[project_version] = keys

    def default_plugin_keys(self, project_version: Version) -> list[str]:
        """Return the default keys for ``project_version`` (empty if none)."""
        return list(self._defaults.get(project_version, []))

    def default_project_versions(self) -> list[Version]:
        return sorted(self._defaults)

    def freeze(self) -> "PluginRegistry":
        """Make the registry read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, plugin_key: str) -> Plugin | None:
        return self._plugins.get(plugin_key)

    def keys(self) -> list[str]:
        """All registered keys, sorted."""
        return sorted(self._plugins)

    def plugins(self) -> list[Plugin]:
        """All registered plugins, in key order."""
        return [self._plugins[k] for k in self.keys()]

    def __contains__(self, plugin_key: object) -> bool:
        return plugin_key in self._plugins

    def __iter__(self) -> Iterator[Plugin]:
        return iter(self.plugins())

    def __len__(self) -> int:
        return len(self._plugins)
