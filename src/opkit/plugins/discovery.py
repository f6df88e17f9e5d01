"""External plugin discovery via Python entry points.

Installed distributions can contribute plugins under the ``opkit.plugins``
group. An entry point may reference a ``Plugin`` instance, or a callable
returning one ``Plugin`` or a list of them. Discovery is local: only
distributions already installed in the current environment are seen.
"""

import logging
from typing import Any

from opkit.plugin import Plugin

logger = logging.getLogger(__name__)

# Entry point group name
PLUGIN_GROUP = "opkit.plugins"


def _load_entry_points(group: str) -> list[Any]:
    """Load entry points for a given group.

    Uses importlib.metadata (Python 3.10+).
    """
    try:
        from importlib.metadata import entry_points

        eps = entry_points()
        # Python 3.12+ returns EntryPoints, 3.10-3.11 may return a dict
        if isinstance(eps, dict):
            return list(eps.get(group, []))
        return list(eps.select(group=group))
    except Exception as e:
        logger.debug(f"Could not load entry points for {group}: {e}")
        return []


def _as_plugins(obj: Any) -> list[Plugin]:
    if isinstance(obj, Plugin):
        return [obj]
    if callable(obj):
        obj = obj()
        if isinstance(obj, Plugin):
            return [obj]
    if isinstance(obj, (list, tuple)) and all(isinstance(p, Plugin) for p in obj):
        return list(obj)
    raise TypeError(f"expected a Plugin or a list of Plugins, got {type(obj).__name__}")


def discover_external_plugins() -> list[Plugin]:
    """Discover and load external plugins.

    Entry points that fail to load are skipped with a warning.

    Returns:
        Plugins found via entry points, in entry point order.
    """
    plugins: list[Plugin] = []
    for ep in _load_entry_points(PLUGIN_GROUP):
        try:
            found = _as_plugins(ep.load())
        except Exception as e:
            logger.warning(f"Failed to load plugin entry point '{ep.name}': {e}")
            continue
        for p in found:
            logger.info(f"Discovered external plugin {p.key} from '{ep.name}'")
        plugins.extend(found)
    return plugins
