"""Tests for ktgate.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ktgate.config import (
    DEFAULT_KTLINT_VERSION,
    KtlintSettings,
    load_descriptor,
    settings_from_mapping,
)
from ktgate.errors import ConfigError
from ktgate.reporters import ReporterType


def test_load_descriptor_returns_defaults_when_missing(tmp_path: Path) -> None:
    descriptor = load_descriptor(tmp_path)

    assert descriptor.name == tmp_path.name
    assert descriptor.directory == tmp_path.resolve()
    assert descriptor.plugins == []
    assert descriptor.source_sets == {}
    assert descriptor.android_variants == {}
    assert descriptor.konan.targets == []
    assert descriptor.native_components == {}
    assert descriptor.include == []
    assert descriptor.ktlint == {}


def test_load_descriptor_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / "ktgate.yml").write_text(
        """
name: app
plugins: [kotlin, kotlin-android, com.android.library]
build_dir: out
source_sets:
  main: [src/main/kotlin]
  test:
    - src/test/kotlin
    - src/test/resources
android:
  variants:
    freeDebug: [src/main/java, src/free/java]
konan:
  targets: [linux_x64, macos_x64]
  artifacts:
    foo:
      linux_x64: [src/foo/a.kt]
native:
  components:
    main:
      targets:
        linux_x64: [src/nativeMain/kotlin]
include: [lib, tools/cli]
ktlint:
  version: 0.36.0
  verbose: true
""",
        encoding="utf-8",
    )

    descriptor = load_descriptor(tmp_path)

    assert descriptor.name == "app"
    assert descriptor.plugins == ["kotlin", "kotlin-android", "com.android.library"]
    assert descriptor.build_dir == "out"
    assert descriptor.source_sets == {
        "main": ["src/main/kotlin"],
        "test": ["src/test/kotlin", "src/test/resources"],
    }
    assert descriptor.android_variants == {"freeDebug": ["src/main/java", "src/free/java"]}
    assert descriptor.konan.targets == ["linux_x64", "macos_x64"]
    assert descriptor.konan.artifacts == {"foo": {"linux_x64": ["src/foo/a.kt"]}}
    assert descriptor.native_components == {"main": {"linux_x64": ["src/nativeMain/kotlin"]}}
    assert descriptor.include == ["lib", "tools/cli"]
    assert descriptor.ktlint == {"version": "0.36.0", "verbose": True}


def test_load_descriptor_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / "ktgate.yml").write_text("- kotlin\n- android\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_descriptor(tmp_path)


def test_load_descriptor_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "ktgate.yml").write_text("source_sets: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_descriptor(tmp_path)
    assert "Failed to parse" in str(excinfo.value)


def test_settings_from_mapping_overlays_values(tmp_path: Path) -> None:
    settings = settings_from_mapping(
        {
            "version": "0.36.0",
            "debug": "yes",
            "android": True,
            "ignore_failures": True,
            "rule_sets": ["rules/custom.jar"],
            "reporters": ["checkstyle", "json"],
            "additional_editorconfig_file": "config/.editorconfig",
            "classpath": ["libs/ktlint.jar"],
        },
        root=tmp_path,
    )

    assert settings.version == "0.36.0"
    assert settings.debug is True
    assert settings.android is True
    assert settings.ignore_failures is True
    assert settings.verbose is False
    assert settings.rule_sets == ("rules/custom.jar",)
    assert settings.reporters == (ReporterType.CHECKSTYLE, ReporterType.JSON)
    assert settings.additional_editorconfig_file == (tmp_path / "config" / ".editorconfig").resolve()
    assert settings.classpath == ((tmp_path / "libs" / "ktlint.jar").resolve(),)


def test_settings_from_mapping_keeps_base_values() -> None:
    base = KtlintSettings(version="0.35.0", verbose=True, rule_sets=("a",))

    settings = settings_from_mapping({"debug": True}, base=base)

    assert settings.version == "0.35.0"
    assert settings.verbose is True
    assert settings.debug is True
    assert settings.rule_sets == ("a",)


def test_settings_defaults() -> None:
    settings = settings_from_mapping({})

    assert settings == KtlintSettings()
    assert settings.version == DEFAULT_KTLINT_VERSION
    assert settings.reporters == (ReporterType.PLAIN,)


def test_settings_reject_non_boolean_flags() -> None:
    with pytest.raises(ConfigError):
        settings_from_mapping({"verbose": "sometimes"})
