"""Built-in plugin identities and the default registry.

Only identities live here. The scaffolding each plugin performs is
provided by the template machinery, which receives the resolved plugins.
"""

import logging
from typing import Iterable

from opkit.plugin import (
    Capability,
    Plugin,
    PluginRegistry,
    PluginVersion,
    Stage,
    Version,
    build_bundle,
)
from opkit.plugin.keys import DEFAULT_NAME_QUALIFIER

logger = logging.getLogger(__name__)

PROJECT_V2 = Version(2)
PROJECT_V3 = Version(3)

DEFAULT_PROJECT_VERSION = PROJECT_V3

GO_V3_DEPRECATION = (
    "This version is deprecated. The `go/v3` plugin cannot scaffold projects "
    "using kustomize v4+ and cannot fully support Kubernetes 1.25+. "
    "Upgrade your project to `go/v4`; see the migration guide for details."
)
GO_V2_DEPRECATION = (
    "This version is deprecated and will be removed in a future release. "
    "Upgrade your project to `go/v4`."
)


def _qualified(short: str) -> str:
    return short + DEFAULT_NAME_QUALIFIER


BASE_GO_V4 = Plugin(
    name=_qualified("base.go"),
    version=PluginVersion(4),
    supported_project_versions=(PROJECT_V3,),
    description="Go sources: main.go, API types, controllers and webhooks",
)

BASE_GO_V3 = Plugin(
    name=_qualified("base.go"),
    version=PluginVersion(3),
    supported_project_versions=(PROJECT_V3,),
    deprecation_warning=GO_V3_DEPRECATION,
    description="Go sources using the legacy project layout",
)

KUSTOMIZE_V2 = Plugin(
    name=_qualified("kustomize.common"),
    version=PluginVersion(2),
    supported_project_versions=(PROJECT_V3,),
    description="Kustomize v5 manifests under config/",
)

KUSTOMIZE_V1 = Plugin(
    name=_qualified("kustomize.common"),
    version=PluginVersion(1),
    supported_project_versions=(PROJECT_V2, PROJECT_V3),
    deprecation_warning="kustomize/v1 is deprecated, use kustomize/v2.",
    description="Kustomize v3 manifests under config/",
)

GO_V2 = Plugin(
    name=_qualified("go"),
    version=PluginVersion(2),
    supported_project_versions=(PROJECT_V2, PROJECT_V3),
    deprecation_warning=GO_V2_DEPRECATION,
    description="Legacy Go operator layout",
)

DEPLOY_IMAGE_V1_ALPHA = Plugin(
    name=_qualified("deploy-image.go"),
    version=PluginVersion(1, Stage.ALPHA),
    supported_project_versions=(PROJECT_V3,),
    capabilities=Capability.CREATE_API,
    description="API and controller that deploy and manage an operand image",
)

GRAFANA_V1_ALPHA = Plugin(
    name=_qualified("grafana"),
    version=PluginVersion(1, Stage.ALPHA),
    supported_project_versions=(PROJECT_V3,),
    capabilities=Capability.INIT | Capability.EDIT,
    description="Grafana dashboards for controller-runtime metrics",
)

HELM_V1_ALPHA = Plugin(
    name=_qualified("helm"),
    version=PluginVersion(1, Stage.ALPHA),
    supported_project_versions=(PROJECT_V3,),
    capabilities=Capability.INIT | Capability.EDIT,
    description="Helm chart packaging of the operator",
)


def builtin_plugins() -> list[Plugin]:
    """Return every built-in plugin, bundles included."""
    go_v4 = build_bundle(
        _qualified("go"),
        PluginVersion(4),
        BASE_GO_V4,
        KUSTOMIZE_V2,
        description="Default Go operator layout (base.go/v4 + kustomize/v2)",
    )
    go_v3 = build_bundle(
        _qualified("go"),
        PluginVersion(3),
        BASE_GO_V3,
        KUSTOMIZE_V1,
        deprecation_warning=GO_V3_DEPRECATION,
        description="Legacy Go operator layout (base.go/v3 + kustomize/v1)",
    )
    return [
        BASE_GO_V4,
        BASE_GO_V3,
        KUSTOMIZE_V2,
        KUSTOMIZE_V1,
        go_v4,
        go_v3,
        GO_V2,
        DEPLOY_IMAGE_V1_ALPHA,
        GRAFANA_V1_ALPHA,
        HELM_V1_ALPHA,
    ]


def default_registry(extra_plugins: Iterable[Plugin] = ()) -> PluginRegistry:
    """Build the frozen registry used by the CLI.

    Args:
        extra_plugins: Additional plugins, typically discovered through
            entry points. They must not reuse a built-in key.
    """
    plugins = builtin_plugins()
    registry = PluginRegistry(*plugins)
    registry.register(*extra_plugins)

    by_key = {p.key: p for p in plugins}
    registry.set_default_plugins(PROJECT_V3, by_key["go.kubebuilder.io/v4"])
    registry.set_default_plugins(PROJECT_V2, by_key["go.kubebuilder.io/v2"])

    logger.info(f"Plugin registry ready with {len(registry)} plugins")
    return registry.freeze()
