"""Bundles: composite plugins that group other plugins."""

import logging
from dataclasses import dataclass
from functools import reduce

from .errors import NoCommonVersionError
from .keys import key
from .plugin import Capability, Plugin
from .version import PluginVersion, Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bundle(Plugin):
    """A plugin made of an ordered, flat list of member plugins.

    Use ``build_bundle`` to create one; it guarantees that ``plugins`` never
    contains another bundle and that ``supported_project_versions`` is the
    intersection of the members' versions.
    """

    plugins: tuple[Plugin, ...] = ()


def common_supported_project_versions(*plugins: Plugin) -> list[Version]:
    """Return the project versions supported by every plugin, sorted ascending.

    Versions are matched with ``compare == 0``, so separately constructed
    versions with the same number and stage count as the same element.
    """
    if not plugins:
        return []

    common: list[Version] = []
    for candidate in plugins[0].supported_project_versions:
        if any(candidate.compare(seen) == 0 for seen in common):
            continue
        if all(
            any(candidate.compare(v) == 0 for v in p.supported_project_versions)
            for p in plugins[1:]
        ):
            common.append(candidate)
    return sorted(common)


def flatten_plugins(*plugins: Plugin) -> list[Plugin]:
    """Replace every bundle in ``plugins`` by its members, keeping order."""
    flat: list[Plugin] = []
    for p in plugins:
        if isinstance(p, Bundle):
            flat.extend(p.plugins)
        else:
            flat.append(p)
    return flat


def build_bundle(
    name: str,
    version: Version,
    *members: Plugin,
    deprecation_warning: str = "",
    description: str = "",
) -> Bundle:
    """Compose ``members`` into a bundle.

    Nested bundles are flattened. Members must share at least one supported
    project version.

    Raises:
        NoCommonVersionError: If the members have no project version in common.
    """
    plugin_version = PluginVersion(version.number, version.stage)
    plugins = flatten_plugins(*members)
    bundle_key = key(name, str(plugin_version))

    supported = common_supported_project_versions(*plugins)
    if not supported:
        raise NoCommonVersionError(bundle_key, [p.key for p in plugins])

    capabilities = reduce(
        lambda acc, p: acc | p.capabilities, plugins, Capability.NONE
    )
    logger.debug(
        f"Built bundle {bundle_key} from {[p.key for p in plugins]}, "
        f"project versions {[str(v) for v in supported]}"
    )
    return Bundle(
        name=name,
        version=plugin_version,
        supported_project_versions=tuple(supported),
        capabilities=capabilities,
        deprecation_warning=deprecation_warning,
        description=description,
        plugins=tuple(plugins),
    )
