"""Reconcile plugin inputs from flags, the project file and defaults."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from opkit.config import ProjectConfig
from opkit.plugin import ConflictingInputError, Version, validate_key

logger = logging.getLogger(__name__)


@dataclass
class PluginInputs:
    """Project version and plugin keys the resolver should use."""

    project_version: Version
    plugin_keys: list[str] = field(default_factory=list)


def parse_plugin_keys(raw: str | None) -> list[str]:
    """Split a ``--plugins`` value into validated keys.

    Keys are comma separated; surrounding whitespace and empty entries are
    dropped.

    Raises:
        InvalidNameError: If a key has an invalid name.
        MalformedVersionError: If a key has an invalid version.
    """
    if not raw:
        return []
    keys = [k.strip() for k in raw.split(",")]
    keys = [k for k in keys if k]
    for k in keys:
        validate_key(k)
    return keys


def parse_project_version(raw: str | None) -> Version | None:
    """Parse a ``--project-version`` value; empty means not set."""
    if raw is None or raw.strip() == "":
        return None
    return Version.parse(raw.strip())


def resolve_inputs(
    flag_version: Version | None,
    flag_keys: Sequence[str],
    project_config: ProjectConfig | None,
    default_version: Version,
) -> PluginInputs:
    """Pick the project version and plugin keys for this invocation.

    A value given both as a flag and in the project file must agree. When
    only one source sets a value it wins; when neither does the project
    version falls back to ``default_version`` and the keys stay empty so
    that the registry defaults apply.

    Raises:
        ConflictingInputError: If flags and the project file disagree.
    """
    version = flag_version
    keys = list(flag_keys)

    if project_config is not None:
        config_version = project_config.get_version()
        if version is not None and version.compare(config_version) != 0:
            raise ConflictingInputError("project version", str(version), str(config_version))
        if version is None:
            version = config_version

        chain = project_config.get_plugin_chain()
        if keys and chain and keys != chain:
            raise ConflictingInputError("plugins", ",".join(keys), ",".join(chain))
        if not keys:
            keys = chain

    if version is None:
        version = default_version
        logger.debug(f"Using default project version {version}")

    return PluginInputs(project_version=version, plugin_keys=keys)
