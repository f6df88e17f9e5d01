"""Resolution of user-supplied plugin keys to registered plugins.

Keys can take four forms, all resolved against the same registry:

- fully qualified key: ``go.kubebuilder.io/v4``
- short key: ``go/v4``
- fully qualified name: ``go.kubebuilder.io``
- short name: ``go``

A fully qualified key is looked up directly. The other forms collect every
matching candidate, keep those supporting the target project version, and
must end up with exactly one plugin.
"""

import logging
from typing import Iterable, Sequence

from .errors import (
    AmbiguousPluginError,
    NoMatchingPluginError,
    NoResolvedPluginError,
    UnknownFullyQualifiedPluginError,
    UnsupportedProjectVersionError,
)
from .keys import is_fully_qualified, key, short_name, split_key
from .plugin import Plugin, filter_plugins_by_project_version, supports_project_version
from .registry import PluginRegistry
from .version import PluginVersion, Version

logger = logging.getLogger(__name__)


def resolve_plugins(
    registry: PluginRegistry,
    project_version: Version,
    plugin_keys: Sequence[str],
) -> list[Plugin]:
    """Resolve every key in ``plugin_keys`` to exactly one plugin.

    When ``plugin_keys`` is empty the registry defaults for
    ``project_version`` are used instead; if there are none the result is
    empty, which is not an error here (see ``require_resolved``).

    Returns:
        The resolved plugins, in the order of the keys.

    Raises:
        PluginError: The first key that cannot be resolved aborts the whole
            resolution.
    """
    keys = list(plugin_keys)
    if not keys:
        keys = registry.default_plugin_keys(project_version)
        if not keys:
            logger.debug(f"No plugin keys and no defaults for project version {project_version}")
            return []
        logger.debug(f"Using default plugins for project version {project_version}: {keys}")

    resolved = [resolve_plugin(registry, project_version, k) for k in keys]
    logger.debug(f"Resolved plugins: {[p.key for p in resolved]}")
    return resolved


def resolve_plugin(
    registry: PluginRegistry, project_version: Version, plugin_key: str
) -> Plugin:
    """Resolve a single key. See ``resolve_plugins``."""
    name, version = split_key(plugin_key)
    fully_qualified = is_fully_qualified(name)

    if fully_qualified and version:
        return _resolve_fully_qualified_key(registry, project_version, name, version)

    candidates = filter_plugins_by_key(registry.plugins(), plugin_key)
    matching = filter_plugins_by_project_version(candidates, project_version)

    if len(matching) == 1:
        logger.debug(f"Resolved {plugin_key!r} to {matching[0].key}")
        return matching[0]
    if matching:
        raise AmbiguousPluginError(
            plugin_key, [p.key for p in matching], str(project_version)
        )
    if candidates:
        raise NoMatchingPluginError(
            plugin_key,
            NoMatchingPluginError.NO_VERSIONS_MATCH,
            [p.key for p in candidates],
            str(project_version),
        )
    raise NoMatchingPluginError(
        plugin_key,
        NoMatchingPluginError.NO_NAMES_MATCH,
        registry.keys(),
        str(project_version),
    )


def _resolve_fully_qualified_key(
    registry: PluginRegistry, project_version: Version, name: str, version: str
) -> Plugin:
    # Normalizes "go.kubebuilder.io/4" and "go.kubebuilder.io/v4" alike.
    plugin_key = key(name, str(PluginVersion.parse(version)))
    plugin = registry.get(plugin_key)
    if plugin is None:
        raise UnknownFullyQualifiedPluginError(plugin_key)
    if not supports_project_version(plugin, project_version):
        raise UnsupportedProjectVersionError(
            plugin_key,
            str(project_version),
            [str(v) for v in plugin.supported_project_versions],
        )
    logger.debug(f"Resolved {plugin_key!r} directly")
    return plugin


def filter_plugins_by_key(plugins: Iterable[Plugin], plugin_key: str) -> list[Plugin]:
    """Return the plugins matching a possibly partial key, sorted by key.

    A fully qualified name must match exactly while a short name matches the
    short name of each plugin. A version, when present, must compare equal.
    """
    name, version = split_key(plugin_key)
    short = short_name(name)
    fully_qualified = short != name
    parsed = PluginVersion.parse(version) if version else None

    matches = []
    for p in plugins:
        if fully_qualified:
            if p.name != name:
                continue
        elif short_name(p.name) != short:
            continue
        if parsed is not None and p.version.compare(parsed) != 0:
            continue
        matches.append(p)
    return sorted(matches, key=lambda p: p.key)


def require_resolved(plugins: Sequence[Plugin], command: str = "") -> Sequence[Plugin]:
    """Return ``plugins`` unless it is empty.

    Raises:
        NoResolvedPluginError: If no plugin was resolved for ``command``.
    """
    if not plugins:
        raise NoResolvedPluginError(command)
    return plugins


def deprecation_warnings(plugins: Iterable[Plugin]) -> list[tuple[str, str]]:
    """Return ``(key, warning)`` for each resolved plugin that is deprecated."""
    return [(p.key, p.deprecation_warning) for p in plugins if p.is_deprecated]
