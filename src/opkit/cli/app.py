"""Per-invocation CLI state: inputs, resolved plugins and command pipelines."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from opkit.config import ProjectConfig, find_project_config
from opkit.plugin import (
    Bundle,
    Capability,
    NoResolvedPluginError,
    Plugin,
    PluginRegistry,
    Version,
    deprecation_warnings,
    require_resolved,
    resolve_plugins,
)
from opkit.plugins import DEFAULT_PROJECT_VERSION

from .inputs import PluginInputs, parse_plugin_keys, parse_project_version, resolve_inputs

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """What a plugin subcommand receives when it runs."""

    command: str
    capability: Capability
    project_version: Version
    plugin_chain: list[str]
    project_config: ProjectConfig | None = None
    args: dict[str, Any] = field(default_factory=dict)


class OpkitCLI:
    """Resolves plugins once per invocation and runs command pipelines.

    Resolution is deferred until a command needs plugins so that commands
    such as ``--help`` or ``plugins`` keep working with a broken or missing
    project configuration.
    """

    def __init__(
        self,
        registry: PluginRegistry,
        plugins_flag: str | None = None,
        project_version_flag: str | None = None,
        project_file: Path | None = None,
        default_project_version: Version = DEFAULT_PROJECT_VERSION,
    ) -> None:
        self.registry = registry
        self.plugins_flag = plugins_flag
        self.project_version_flag = project_version_flag
        self.project_file = project_file
        self.default_project_version = default_project_version
        self._project_config: ProjectConfig | None = None
        self._inputs: PluginInputs | None = None
        self._resolved: list[Plugin] | None = None

    @property
    def project_config(self) -> ProjectConfig | None:
        self._load()
        return self._project_config

    @property
    def inputs(self) -> PluginInputs:
        return self._load()

    def _load(self) -> PluginInputs:
        if self._inputs is not None:
            return self._inputs
        flag_keys = parse_plugin_keys(self.plugins_flag)
        flag_version = parse_project_version(self.project_version_flag)
        # Only the implicit ./PROJECT may be missing.
        self._project_config = find_project_config(
            self.project_file, required=self.project_file is not None
        )
        self._inputs = resolve_inputs(
            flag_version, flag_keys, self._project_config, self.default_project_version
        )
        return self._inputs

    def resolved_plugins(self) -> list[Plugin]:
        """Resolve the requested plugins, caching the result."""
        if self._resolved is None:
            inputs = self.inputs
            self._resolved = resolve_plugins(
                self.registry, inputs.project_version, inputs.plugin_keys
            )
        return list(self._resolved)

    def deprecation_warnings(self) -> list[tuple[str, str]]:
        return deprecation_warnings(self.resolved_plugins())

    def plan(self, capability: Capability, command: str) -> list[Plugin]:
        """Return the ordered plugins that take part in ``command``.

        Bundles are expanded into their members; members without the
        capability are skipped.

        Raises:
            NoResolvedPluginError: If nothing resolved, or no resolved plugin
                provides ``capability``.
        """
        resolved = require_resolved(self.resolved_plugins(), command)
        steps: list[Plugin] = []
        for p in resolved:
            members = p.plugins if isinstance(p, Bundle) else (p,)
            steps.extend(m for m in members if m.supports(capability))
        if not steps:
            raise NoResolvedPluginError(command)
        return steps

    def run(self, capability: Capability, command: str, **args: Any) -> list[Plugin]:
        """Run ``command`` through the plugin pipeline, in order.

        Returns:
            The plugins that ran.
        """
        steps = self.plan(capability, command)
        inputs = self.inputs
        context = CommandContext(
            command=command,
            capability=capability,
            project_version=inputs.project_version,
            plugin_chain=[p.key for p in self.resolved_plugins()],
            project_config=self._project_config,
            args=args,
        )
        for p in steps:
            subcommand = p.subcommand(capability)
            if subcommand is None:
                logger.debug(f"{p.key} has no {command} implementation registered")
                continue
            logger.info(f"Running {command} for {p.key}")
            subcommand(p, context)
        return steps
