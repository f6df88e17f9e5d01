"""Plugin key encoding.

A key is ``name`` or ``name/version``. The name is either short (``go``) or
fully qualified with a domain suffix (``go.kubebuilder.io``); the version is
a plugin version such as ``v4`` or ``v1-alpha``.
"""

from typing import Protocol

from .errors import InvalidNameError
from .validation import is_dns1123_subdomain
from .version import PluginVersion, Version

# Suffix of every built-in plugin name.
DEFAULT_NAME_QUALIFIER = ".kubebuilder.io"


class Identified(Protocol):
    name: str
    version: Version


def key(name: str, version: str) -> str:
    """Join ``name`` and ``version`` into a key.

    The version may be given with or without its leading ``v``.
    """
    if version == "":
        return name
    return f"{name}/v{version.lstrip('v')}"


def key_for(plugin: Identified) -> str:
    """Return a plugin's unique key, e.g. ``go.kubebuilder.io/v4``."""
    return key(plugin.name, str(plugin.version))


def split_key(plugin_key: str) -> tuple[str, str]:
    """Split a key on its first ``/`` into ``(name, version)``."""
    name, _, version = plugin_key.partition("/")
    return name, version


def short_name(name: str) -> str:
    """Return the part of ``name`` before the first dot."""
    return name.split(".", 1)[0]


def is_fully_qualified(name: str) -> bool:
    return short_name(name) != name


def validate_name(name: str) -> None:
    """Raise InvalidNameError unless ``name`` is a DNS-1123 subdomain."""
    errs = is_dns1123_subdomain(name)
    if errs:
        raise InvalidNameError(name, errs)


def validate_key(plugin_key: str) -> None:
    """Validate both parts of a (possibly unversioned) key.

    Raises:
        InvalidNameError: If the name part is not a DNS-1123 subdomain.
        MalformedVersionError: If a version part is present and invalid.
    """
    name, version = split_key(plugin_key)
    validate_name(name)
    # Keys given on the command line do not need a version.
    if version:
        PluginVersion.parse(version)
