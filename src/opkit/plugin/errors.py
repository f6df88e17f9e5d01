"""Error types raised while validating, composing and resolving plugins."""

from enum import Enum
from typing import Sequence


class ErrorKind(str, Enum):
    """Closed set of plugin error kinds."""

    MALFORMED_VERSION = "malformed_version"
    INVALID_NAME = "invalid_name"
    INVALID_PLUGIN = "invalid_plugin"
    DUPLICATE_KEY = "duplicate_key"
    NO_COMMON_VERSION = "no_common_version"
    UNKNOWN_FULLY_QUALIFIED_PLUGIN = "unknown_fully_qualified_plugin"
    NO_MATCHING_PLUGIN = "no_matching_plugin"
    AMBIGUOUS_PLUGIN = "ambiguous_plugin"
    UNSUPPORTED_PROJECT_VERSION = "unsupported_project_version"
    CONFLICTING_INPUT = "conflicting_input"
    NO_RESOLVED_PLUGIN = "no_resolved_plugin"
    REGISTRY_FROZEN = "registry_frozen"


def _format_keys(keys: Sequence[str]) -> str:
    return "[" + ", ".join(f'"{k}"' for k in keys) + "]"


class PluginError(Exception):
    """Base class for all plugin engine errors.

    Every subclass sets ``kind``; structured details are kept as attributes
    so callers never have to parse the message.
    """

    kind: ErrorKind


class MalformedVersionError(PluginError):
    """A version string or literal does not satisfy the version grammar."""

    kind = ErrorKind.MALFORMED_VERSION

    def __init__(self, version: str, reason: str) -> None:
        self.version = version
        self.reason = reason
        super().__init__(f"invalid version {version!r}: {reason}")


class EmptyVersionError(MalformedVersionError):
    def __init__(self) -> None:
        super().__init__("", "version is empty")


class NonPositiveNumberError(MalformedVersionError):
    def __init__(self, version: str) -> None:
        super().__init__(version, "version number must be a positive integer")


class MalformedNumberError(MalformedVersionError):
    def __init__(self, version: str) -> None:
        super().__init__(version, "version number must be a base-10 integer")


class InvalidStageError(MalformedVersionError):
    def __init__(self, version: str, stage: str) -> None:
        self.stage = stage
        super().__init__(version, f'stage {stage!r} must be "alpha" or "beta"')


class InvalidNameError(PluginError):
    """A plugin name is not a DNS-1123 subdomain."""

    kind = ErrorKind.INVALID_NAME

    def __init__(self, name: str, details: Sequence[str]) -> None:
        self.name = name
        self.details = list(details)
        super().__init__(f"invalid plugin name {name!r}: {'; '.join(self.details)}")


class InvalidPluginError(PluginError):
    """A plugin identity is structurally invalid."""

    kind = ErrorKind.INVALID_PLUGIN

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"plugin {key!r} is invalid: {reason}")


class DuplicateKeyError(PluginError):
    """Two plugins were registered under the same key."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"two plugins have the same key: {key!r}")


class NoCommonVersionError(PluginError):
    """Bundle members do not share any supported project version."""

    kind = ErrorKind.NO_COMMON_VERSION

    def __init__(self, bundle_key: str, member_keys: Sequence[str]) -> None:
        self.key = bundle_key
        self.candidates = list(member_keys)
        super().__init__(
            f"bundle {bundle_key!r}: plugins {_format_keys(self.candidates)} "
            "do not share a common supported project version"
        )


class UnknownFullyQualifiedPluginError(PluginError):
    """A fully qualified key does not name any registered plugin."""

    kind = ErrorKind.UNKNOWN_FULLY_QUALIFIED_PLUGIN

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"plugin {key!r} is not registered")


class NoMatchingPluginError(PluginError):
    """A partial key matched no plugin supporting the project version.

    ``reason`` is ``"no names match"`` when no plugin matched the name and
    version filters, or ``"no versions match"`` when candidates existed but
    none supports the target project version.
    """

    kind = ErrorKind.NO_MATCHING_PLUGIN

    NO_NAMES_MATCH = "no names match"
    NO_VERSIONS_MATCH = "no versions match"

    def __init__(
        self, key: str, reason: str, candidates: Sequence[str], project_version: str
    ) -> None:
        self.key = key
        self.reason = reason
        self.candidates = list(candidates)
        self.project_version = project_version
        super().__init__(
            f"no plugin could be resolved with key {key!r} for project version "
            f"{project_version!r}: {reason}, possible plugins: "
            f"{_format_keys(self.candidates)}"
        )


class AmbiguousPluginError(PluginError):
    """A partial key matched more than one plugin."""

    kind = ErrorKind.AMBIGUOUS_PLUGIN

    def __init__(self, key: str, candidates: Sequence[str], project_version: str) -> None:
        self.key = key
        self.candidates = sorted(candidates)
        self.project_version = project_version
        super().__init__(
            f"ambiguous plugin {key!r} for project version {project_version!r}: "
            f"possible plugins: {_format_keys(self.candidates)}"
        )


class UnsupportedProjectVersionError(PluginError):
    """A plugin does not support the target project version."""

    kind = ErrorKind.UNSUPPORTED_PROJECT_VERSION

    def __init__(self, key: str, project_version: str, supported: Sequence[str]) -> None:
        self.key = key
        self.project_version = project_version
        self.supported = list(supported)
        super().__init__(
            f"plugin {key!r} does not support project version {project_version!r} "
            f"(supported: {', '.join(self.supported)})"
        )


class ConflictingInputError(PluginError):
    """Command-line flags and the project file disagree."""

    kind = ErrorKind.CONFLICTING_INPUT

    def __init__(self, field: str, flag_value: str, config_value: str) -> None:
        self.field = field
        self.flag_value = flag_value
        self.config_value = config_value
        super().__init__(
            f"{field} conflict between command line args ({flag_value}) "
            f"and project configuration file ({config_value})"
        )


class NoResolvedPluginError(PluginError):
    """A command that needs a plugin ran with none resolved."""

    kind = ErrorKind.NO_RESOLVED_PLUGIN

    def __init__(self, command: str = "") -> None:
        self.command = command
        prefix = f"{command}: " if command else ""
        super().__init__(
            f"{prefix}no resolved plugin, please verify the project version "
            "and plugins specified in flags or configuration file"
        )


class RegistryFrozenError(PluginError):
    """The registry no longer accepts new plugins."""

    kind = ErrorKind.REGISTRY_FROZEN

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"cannot register {key!r}: registry is read-only")
