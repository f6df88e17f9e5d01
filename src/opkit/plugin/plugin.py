"""Plugin identities and their capabilities."""

from dataclasses import dataclass, field
from enum import Flag
from typing import Any, Callable, Iterable, Mapping

from .errors import InvalidPluginError, MalformedVersionError
from .keys import key_for, validate_name
from .version import PluginVersion, Version


class Capability(Flag):
    """Subcommands a plugin can contribute."""

    NONE = 0
    INIT = 1
    CREATE_API = 2
    CREATE_WEBHOOK = 4
    EDIT = 8
    ALL = 15

    @property
    def label(self) -> str:
        return _CAPABILITY_LABELS.get(self, self.name or "")


_CAPABILITY_LABELS = {
    Capability.INIT: "init",
    Capability.CREATE_API: "create api",
    Capability.CREATE_WEBHOOK: "create webhook",
    Capability.EDIT: "edit",
}

# Callable invoked by the CLI when a resolved plugin runs one of its
# subcommands. It receives the plugin and the command context.
Subcommand = Callable[..., Any]


@dataclass(frozen=True)
class Plugin:
    """Identity of a scaffolding plugin.

    The resolution engine only looks at ``name``, ``version`` and
    ``supported_project_versions``. Capabilities and subcommands are
    consumed by the CLI once plugins have been resolved.
    """

    name: str
    version: PluginVersion
    supported_project_versions: tuple[Version, ...] = ()
    capabilities: Capability = Capability.ALL
    deprecation_warning: str = ""
    description: str = ""
    subcommands: Mapping[Capability, Subcommand] = field(
        default_factory=dict, compare=False, repr=False
    )

    @property
    def key(self) -> str:
        return key_for(self)

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecation_warning)

    def supports(self, capability: Capability) -> bool:
        return capability != Capability.NONE and capability in self.capabilities

    def subcommand(self, capability: Capability) -> Subcommand | None:
        return self.subcommands.get(capability)

    def __str__(self) -> str:
        return self.key


def validate_plugin(plugin: Plugin) -> None:
    """Ensure a plugin identity is well formed.

    Raises:
        InvalidNameError: If the name is not a DNS-1123 subdomain.
        MalformedVersionError: If the plugin version is invalid.
        InvalidPluginError: If the version is not a ``Version``, or supported
            project versions are missing or one of them is invalid.
    """
    validate_name(plugin.name)
    plugin_key = key_for(plugin)
    if not isinstance(plugin.version, Version):
        raise InvalidPluginError(
            plugin_key, f"version must be a Version, got {type(plugin.version).__name__}"
        )
    plugin.version.validate()
    if not plugin.supported_project_versions:
        raise InvalidPluginError(plugin_key, "must support at least one project version")
    for project_version in plugin.supported_project_versions:
        if not isinstance(project_version, Version):
            raise InvalidPluginError(
                plugin_key,
                f"supports an invalid project version: {project_version!r} is not a Version",
            )
        try:
            project_version.validate()
        except MalformedVersionError as e:
            raise InvalidPluginError(
                plugin_key, f"supports an invalid project version: {e}"
            ) from e


def supports_project_version(plugin: Plugin, project_version: Version) -> bool:
    """Check whether ``plugin`` supports ``project_version``."""
    return any(
        project_version.compare(version) == 0
        for version in plugin.supported_project_versions
    )


def filter_plugins_by_project_version(
    plugins: Iterable[Plugin], project_version: Version
) -> list[Plugin]:
    """Return the plugins that support ``project_version``, keeping order."""
    return [p for p in plugins if supports_project_version(p, project_version)]
