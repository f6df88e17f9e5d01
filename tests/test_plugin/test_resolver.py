"""Tests for plugin key resolution."""

import pytest

from opkit.plugin import (
    AmbiguousPluginError,
    ErrorKind,
    MalformedVersionError,
    NoMatchingPluginError,
    NoResolvedPluginError,
    Plugin,
    PluginRegistry,
    PluginVersion,
    Stage,
    UnknownFullyQualifiedPluginError,
    UnsupportedProjectVersionError,
    Version,
    build_bundle,
    deprecation_warnings,
    require_resolved,
    resolve_plugins,
)
from opkit.plugin.resolver import filter_plugins_by_key

V2 = Version(2)
V3 = Version(3)


def _make_plugin(name, version, project_versions=(V3,), **kwargs):
    return Plugin(
        name=name,
        version=PluginVersion.parse(version),
        supported_project_versions=tuple(project_versions),
        **kwargs,
    )


FOO_EXAMPLE_V1 = _make_plugin("foo.example.com", "v1")
FOO_KB_V1 = _make_plugin("foo.kubebuilder.io", "v1")
FOO_KB_V2 = _make_plugin("foo.kubebuilder.io", "v2")


@pytest.fixture
def registry():
    return PluginRegistry(FOO_EXAMPLE_V1, FOO_KB_V1, FOO_KB_V2).freeze()


class TestAmbiguityDetection:
    def test_short_name_is_ambiguous(self, registry):
        with pytest.raises(AmbiguousPluginError) as exc_info:
            resolve_plugins(registry, V3, ["foo"])
        err = exc_info.value
        assert err.kind is ErrorKind.AMBIGUOUS_PLUGIN
        assert err.key == "foo"
        assert err.candidates == [
            "foo.example.com/v1",
            "foo.kubebuilder.io/v1",
            "foo.kubebuilder.io/v2",
        ]
        assert '"foo.example.com/v1", "foo.kubebuilder.io/v1", "foo.kubebuilder.io/v2"' in str(err)

    def test_short_key_with_unique_version(self, registry):
        assert resolve_plugins(registry, V3, ["foo/v2"]) == [FOO_KB_V2]

    def test_short_key_with_shared_version_is_ambiguous(self, registry):
        with pytest.raises(AmbiguousPluginError) as exc_info:
            resolve_plugins(registry, V3, ["foo/v1"])
        assert exc_info.value.candidates == ["foo.example.com/v1", "foo.kubebuilder.io/v1"]

    def test_fully_qualified_name(self, registry):
        assert resolve_plugins(registry, V3, ["foo.example.com"]) == [FOO_EXAMPLE_V1]

    def test_fully_qualified_name_with_versions_is_ambiguous(self, registry):
        with pytest.raises(AmbiguousPluginError) as exc_info:
            resolve_plugins(registry, V3, ["foo.kubebuilder.io"])
        assert exc_info.value.candidates == ["foo.kubebuilder.io/v1", "foo.kubebuilder.io/v2"]

    def test_unknown_name(self, registry):
        with pytest.raises(NoMatchingPluginError) as exc_info:
            resolve_plugins(registry, V3, ["blah"])
        err = exc_info.value
        assert err.reason == NoMatchingPluginError.NO_NAMES_MATCH
        assert err.candidates == registry.keys()
        assert "no names match" in str(err)


class TestFullyQualifiedKey:
    def test_direct_lookup(self, registry):
        assert resolve_plugins(registry, V3, ["foo.kubebuilder.io/v1"]) == [FOO_KB_V1]

    def test_version_without_prefix(self, registry):
        assert resolve_plugins(registry, V3, ["foo.kubebuilder.io/1"]) == [FOO_KB_V1]

    def test_unknown(self, registry):
        with pytest.raises(UnknownFullyQualifiedPluginError) as exc_info:
            resolve_plugins(registry, V3, ["foo.kubebuilder.io/v9"])
        assert exc_info.value.key == "foo.kubebuilder.io/v9"

    def test_unsupported_project_version(self):
        legacy = _make_plugin("legacy.example.com", "v1", project_versions=(V2,))
        registry = PluginRegistry(legacy)
        with pytest.raises(UnsupportedProjectVersionError) as exc_info:
            resolve_plugins(registry, V3, ["legacy.example.com/v1"])
        assert exc_info.value.project_version == "3"
        assert exc_info.value.supported == ["2"]

    def test_malformed_version(self, registry):
        with pytest.raises(MalformedVersionError):
            resolve_plugins(registry, V3, ["foo.kubebuilder.io/v0"])


class TestProjectVersionFilter:
    def test_filter_leaves_one(self):
        old = _make_plugin("go.example.com", "v1", project_versions=(V2,))
        new = _make_plugin("go.example.com", "v2", project_versions=(V3,))
        registry = PluginRegistry(old, new)
        assert resolve_plugins(registry, V3, ["go"]) == [new]
        assert resolve_plugins(registry, V2, ["go"]) == [old]

    def test_no_versions_match(self):
        old = _make_plugin("go.example.com", "v1", project_versions=(V2,))
        other = _make_plugin("bar.example.com", "v1")
        registry = PluginRegistry(old, other)
        with pytest.raises(NoMatchingPluginError) as exc_info:
            resolve_plugins(registry, V3, ["go"])
        err = exc_info.value
        assert err.reason == NoMatchingPluginError.NO_VERSIONS_MATCH
        assert err.candidates == ["go.example.com/v1"]
        assert err.project_version == "3"

    def test_unstable_version_key(self):
        alpha = _make_plugin("grafana.example.com", "v1-alpha")
        stable = _make_plugin("grafana.example.com", "v1")
        registry = PluginRegistry(alpha, stable)
        assert resolve_plugins(registry, V3, ["grafana/v1-alpha"]) == [alpha]
        assert resolve_plugins(registry, V3, ["grafana/v1"]) == [stable]

    def test_unstable_project_version(self):
        p = _make_plugin("go.example.com", "v1", project_versions=(Version(3, Stage.ALPHA),))
        registry = PluginRegistry(p)
        assert resolve_plugins(registry, Version.parse("3-alpha"), ["go"]) == [p]
        with pytest.raises(NoMatchingPluginError):
            resolve_plugins(registry, V3, ["go"])


class TestResolvePlugins:
    def test_preserves_input_order(self):
        extra = _make_plugin("bar.example.com", "v1")
        registry = PluginRegistry(FOO_EXAMPLE_V1, FOO_KB_V2, extra)
        keys = ["foo/v2", "bar", "foo.example.com/v1"]
        assert resolve_plugins(registry, V3, keys) == [FOO_KB_V2, extra, FOO_EXAMPLE_V1]

    def test_deterministic(self, registry):
        keys = ["foo/v2", "foo.example.com", "foo.kubebuilder.io/v1"]
        first = resolve_plugins(registry, V3, keys)
        for _ in range(5):
            assert resolve_plugins(registry, V3, keys) == first

    def test_fails_as_a_whole(self, registry):
        with pytest.raises(NoMatchingPluginError):
            resolve_plugins(registry, V3, ["foo/v2", "missing"])

    def test_uses_defaults_when_no_keys(self):
        go = _make_plugin("go.example.com", "v1")
        kustomize = _make_plugin("kustomize.example.com", "v2")
        registry = PluginRegistry(go, kustomize)
        registry.set_default_plugins(V3, go, kustomize)
        assert resolve_plugins(registry, V3, []) == [go, kustomize]

    def test_no_keys_and_no_defaults_is_empty(self, registry):
        assert resolve_plugins(registry, V2, []) == []

    def test_resolves_bundles(self):
        base = _make_plugin("base.go.example.com", "v4")
        kustomize = _make_plugin("kustomize.example.com", "v2")
        go = build_bundle("go.example.com", PluginVersion(4), base, kustomize)
        registry = PluginRegistry(base, kustomize, go)
        assert resolve_plugins(registry, V3, ["go/v4"]) == [go]


class TestFilterPluginsByKey:
    def test_sorted_by_key(self):
        plugins = [FOO_KB_V2, FOO_EXAMPLE_V1, FOO_KB_V1]
        assert filter_plugins_by_key(plugins, "foo") == [FOO_EXAMPLE_V1, FOO_KB_V1, FOO_KB_V2]

    def test_fully_qualified_name_matches_exactly(self):
        plugins = [FOO_KB_V2, FOO_EXAMPLE_V1]
        assert filter_plugins_by_key(plugins, "foo.example.com") == [FOO_EXAMPLE_V1]

    def test_short_name_does_not_match_prefix(self):
        foobar = _make_plugin("foobar.example.com", "v1")
        assert filter_plugins_by_key([foobar, FOO_KB_V1], "foo") == [FOO_KB_V1]


class TestRequireResolved:
    def test_empty_raises(self):
        with pytest.raises(NoResolvedPluginError, match="no resolved plugin") as exc_info:
            require_resolved([], "create api")
        assert exc_info.value.command == "create api"

    def test_passthrough(self):
        assert require_resolved([FOO_KB_V1]) == [FOO_KB_V1]


class TestDeprecationWarnings:
    def test_only_deprecated(self):
        old = _make_plugin("old.example.com", "v1", deprecation_warning="use v2")
        assert deprecation_warnings([FOO_KB_V1, old]) == [("old.example.com/v1", "use v2")]
