"""Tests for ktlint version parsing and reporter gating."""

from __future__ import annotations

import pytest

from ktgate.errors import ConfigError
from ktgate.reporters import ReporterType, enabled_reporters
from ktgate.version import SemVer, check_minimal_supported_version


def test_semver_orders_by_major_minor_patch() -> None:
    assert SemVer.parse("0.34.0") < SemVer.parse("0.34.1")
    assert SemVer.parse("0.34.9") < SemVer.parse("0.35.0")
    assert SemVer.parse("0.99.0") < SemVer.parse("1.0.0")
    assert SemVer.parse("0.10.0") > SemVer.parse("0.9.0")


def test_semver_pre_release_sorts_before_release() -> None:
    assert SemVer.parse("0.36.0-rc1") < SemVer.parse("0.36.0")
    assert SemVer.parse("1.0.0+build5") == SemVer.parse("1.0.0")


@pytest.mark.parametrize("value", ["", "0.34", "v0.34.0", "0.34.x", "01.2.3"])
def test_semver_rejects_malformed_versions(value: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        SemVer.parse(value)
    assert repr(value) in str(excinfo.value)


def test_minimal_version_rejects_older_ktlint() -> None:
    with pytest.raises(ConfigError) as excinfo:
        check_minimal_supported_version("0.33.9")
    assert "0.33.9" in str(excinfo.value)


def test_minimal_version_accepts_0_34_0() -> None:
    assert check_minimal_supported_version("0.34.0") == SemVer(0, 34, 0)


def test_reporter_enabled_only_from_its_introduction_version() -> None:
    configured = [ReporterType.PLAIN, ReporterType.HTML]

    assert enabled_reporters("0.35.0", configured) == [ReporterType.PLAIN]
    assert enabled_reporters("0.36.0", configured) == [ReporterType.PLAIN, ReporterType.HTML]


def test_reporter_requires_configuration() -> None:
    assert enabled_reporters("0.40.0", [ReporterType.JSON]) == [ReporterType.JSON]


def test_reporter_cli_argument_includes_options() -> None:
    assert ReporterType.CHECKSTYLE.cli_argument("out.xml") == "--reporter=checkstyle,output=out.xml"
    assert (
        ReporterType.PLAIN_GROUP_BY_FILE.cli_argument("out.txt")
        == "--reporter=plain,group_by_file,output=out.txt"
    )


def test_reporter_from_name() -> None:
    assert ReporterType.from_name("checkstyle") is ReporterType.CHECKSTYLE
    assert ReporterType.from_name("plain-group-by-file") is ReporterType.PLAIN_GROUP_BY_FILE
    with pytest.raises(ConfigError):
        ReporterType.from_name("sarif")
