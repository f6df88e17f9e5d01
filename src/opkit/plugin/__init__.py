"""Plugin identity, composition and resolution engine."""

from .bundle import Bundle, build_bundle, common_supported_project_versions
from .errors import (
    AmbiguousPluginError,
    ConflictingInputError,
    DuplicateKeyError,
    ErrorKind,
    InvalidNameError,
    InvalidPluginError,
    MalformedVersionError,
    NoCommonVersionError,
    NoMatchingPluginError,
    NoResolvedPluginError,
    PluginError,
    UnknownFullyQualifiedPluginError,
    UnsupportedProjectVersionError,
)
from .keys import key, key_for, short_name, split_key, validate_key, validate_name
from .plugin import Capability, Plugin, supports_project_version, validate_plugin
from .registry import PluginRegistry
from .resolver import deprecation_warnings, require_resolved, resolve_plugins
from .stage import Stage
from .version import PluginVersion, Version

__all__ = [
    "AmbiguousPluginError",
    "Bundle",
    "Capability",
    "ConflictingInputError",
    "DuplicateKeyError",
    "ErrorKind",
    "InvalidNameError",
    "InvalidPluginError",
    "MalformedVersionError",
    "NoCommonVersionError",
    "NoMatchingPluginError",
    "NoResolvedPluginError",
    "Plugin",
    "PluginError",
    "PluginRegistry",
    "PluginVersion",
    "Stage",
    "UnknownFullyQualifiedPluginError",
    "UnsupportedProjectVersionError",
    "Version",
    "build_bundle",
    "common_supported_project_versions",
    "deprecation_warnings",
    "key",
    "key_for",
    "require_resolved",
    "resolve_plugins",
    "short_name",
    "split_key",
    "supports_project_version",
    "validate_key",
    "validate_name",
    "validate_plugin",
]
