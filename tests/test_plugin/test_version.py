"""Tests for versions and stages."""

import pytest

from opkit.plugin.errors import (
    EmptyVersionError,
    InvalidStageError,
    MalformedNumberError,
    MalformedVersionError,
    NonPositiveNumberError,
)
from opkit.plugin.stage import Stage
from opkit.plugin.version import PluginVersion, Version


class TestStage:
    @pytest.mark.parametrize(
        "text,expected",
        [("", Stage.STABLE), ("alpha", Stage.ALPHA), ("beta", Stage.BETA)],
    )
    def test_parse(self, text, expected):
        assert Stage.parse(text) is expected

    @pytest.mark.parametrize("text", ["1", "gamma", "-alpha", "Alpha"])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidStageError):
            Stage.parse(text)

    def test_string(self):
        assert str(Stage.STABLE) == ""
        assert str(Stage.ALPHA) == "alpha"
        assert str(Stage.BETA) == "beta"

    def test_compare(self):
        assert Stage.STABLE.compare(Stage.BETA) == 1
        assert Stage.BETA.compare(Stage.ALPHA) == 1
        assert Stage.ALPHA.compare(Stage.STABLE) == -1
        assert Stage.BETA.compare(Stage.BETA) == 0


class TestParse:
    @pytest.mark.parametrize(
        "text,number,stage",
        [
            ("1", 1, Stage.STABLE),
            ("1-alpha", 1, Stage.ALPHA),
            ("1-beta", 1, Stage.BETA),
            ("22", 22, Stage.STABLE),
            ("v22-alpha", 22, Stage.ALPHA),
            ("v3", 3, Stage.STABLE),
        ],
    )
    def test_valid(self, text, number, stage):
        v = Version.parse(text)
        assert v.number == number
        assert v.stage is stage

    def test_empty(self):
        with pytest.raises(EmptyVersionError):
            Version.parse("")

    @pytest.mark.parametrize("text", ["0", "v0", "0-alpha", "00"])
    def test_non_positive(self, text):
        with pytest.raises(NonPositiveNumberError):
            Version.parse(text)

    @pytest.mark.parametrize("text", ["v", "-1", "1.0", "v1.0-alpha", "1.0.0", "a1", "+1", " 1"])
    def test_malformed_number(self, text):
        with pytest.raises(MalformedNumberError):
            Version.parse(text)

    @pytest.mark.parametrize("text", ["1-a", "1-", "2-gamma", "1-alpha-beta"])
    def test_invalid_stage(self, text):
        with pytest.raises(InvalidStageError):
            Version.parse(text)

    def test_all_failures_are_malformed_version_errors(self):
        for text in ("", "0", "x", "1-x"):
            with pytest.raises(MalformedVersionError):
                Version.parse(text)

    def test_plugin_version_parse_returns_plugin_flavor(self):
        v = PluginVersion.parse("v1-alpha")
        assert isinstance(v, PluginVersion)
        assert str(v) == "v1-alpha"


class TestString:
    def test_project_flavor(self):
        assert str(Version(1)) == "1"
        assert str(Version(3, Stage.ALPHA)) == "3-alpha"
        assert str(Version(22, Stage.BETA)) == "22-beta"

    def test_plugin_flavor(self):
        assert str(PluginVersion(4)) == "v4"
        assert str(PluginVersion(1, Stage.ALPHA)) == "v1-alpha"

    @pytest.mark.parametrize(
        "version",
        [Version(1), Version(2, Stage.BETA), Version(30, Stage.ALPHA)],
    )
    def test_round_trip_project(self, version):
        assert Version.parse(str(version)).compare(version) == 0

    @pytest.mark.parametrize(
        "version",
        [PluginVersion(1), PluginVersion(2, Stage.BETA), PluginVersion(44, Stage.ALPHA)],
    )
    def test_round_trip_plugin(self, version):
        parsed = PluginVersion.parse(str(version))
        assert parsed.compare(version) == 0
        assert str(parsed) == str(version)


class TestCompare:
    def test_sorts_versions(self):
        versions = [
            PluginVersion(1),
            PluginVersion(1, Stage.ALPHA),
            PluginVersion(2, Stage.ALPHA),
            PluginVersion(2, Stage.BETA),
            PluginVersion(4, Stage.ALPHA),
            PluginVersion(4, Stage.BETA),
            PluginVersion(4),
            PluginVersion(30),
            PluginVersion(44, Stage.ALPHA),
        ]
        shuffled = [versions[i] for i in (8, 3, 0, 6, 1, 5, 2, 7, 4)]
        result = sorted(shuffled)
        assert [str(v) for v in result] == [
            "v1-alpha",
            "v1",
            "v2-alpha",
            "v2-beta",
            "v4-alpha",
            "v4-beta",
            "v4",
            "v30",
            "v44-alpha",
        ]

    def test_number_wins_over_stage(self):
        assert Version(2, Stage.ALPHA).compare(Version(1)) == 1
        assert Version(1).compare(Version(2, Stage.ALPHA)) == -1

    def test_equal_across_flavors(self):
        assert Version(3).compare(PluginVersion(3)) == 0
        assert Version(3) == PluginVersion(3)
        assert hash(Version(3, Stage.BETA)) == hash(PluginVersion(3, Stage.BETA))

    def test_separately_built_versions_are_equal(self):
        assert Version.parse("3-alpha") == Version(3, Stage.ALPHA)
        assert len({Version(3), Version.parse("3"), Version.parse("v3")}) == 1


class TestValidate:
    def test_valid(self):
        Version(1).validate()
        Version(7, Stage.BETA).validate()

    @pytest.mark.parametrize("number", [0, -1])
    def test_non_positive(self, number):
        with pytest.raises(NonPositiveNumberError):
            Version(number).validate()
        assert Version(number).is_valid() is False

    def test_non_integer_number(self):
        with pytest.raises(MalformedNumberError):
            Version("3").validate()

    def test_invalid_stage(self):
        with pytest.raises(InvalidStageError):
            Version(1, "gamma").validate()

    def test_is_stable(self):
        assert Version(1).is_stable()
        assert not Version(1, Stage.ALPHA).is_stable()
        assert not PluginVersion(22, Stage.BETA).is_stable()
