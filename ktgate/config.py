"""Configuration loading for ktgate build descriptors (ktgate.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .reporters import ReporterType

DESCRIPTOR_FILE_NAME = "ktgate.yml"
DEFAULT_KTLINT_VERSION = "0.34.2"


@dataclass(frozen=True)
class KtlintSettings:
    """ktlint extension settings shared by every task of a project."""

    version: str = DEFAULT_KTLINT_VERSION
    verbose: bool = False
    debug: bool = False
    android: bool = False
    ignore_failures: bool = False
    output_to_console: bool = True
    rule_sets: Tuple[str, ...] = ()
    reporters: Tuple[ReporterType, ...] = (ReporterType.PLAIN,)
    additional_editorconfig_file: Optional[Path] = None
    executable: Optional[str] = None
    classpath: Tuple[Path, ...] = ()
    java: str = "java"


@dataclass
class KonanConfig:
    """Declared konan compile targets and the per-target sources of each artifact."""

    targets: List[str] = field(default_factory=list)
    artifacts: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)


@dataclass
class ProjectDescriptor:
    """Represents one project's ktgate.yml."""

    name: str
    directory: Path
    plugins: List[str] = field(default_factory=list)
    build_dir: str = "build"
    source_sets: Dict[str, List[str]] = field(default_factory=dict)
    android_variants: Dict[str, List[str]] = field(default_factory=dict)
    konan: KonanConfig = field(default_factory=KonanConfig)
    native_components: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    include: List[str] = field(default_factory=list)
    ktlint: Dict[str, Any] = field(default_factory=dict)


def load_descriptor(directory: Path) -> ProjectDescriptor:
    """Load ``ktgate.yml`` from ``directory``; a missing file yields an empty project."""
    directory = directory.expanduser().resolve()
    descriptor_file = directory / DESCRIPTOR_FILE_NAME

    if not descriptor_file.exists():
        return ProjectDescriptor(name=directory.name, directory=directory)

    data = _read_descriptor(descriptor_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{descriptor_file} must contain a mapping at the root")

    konan_data = _as_dict(data.get("konan"))
    konan = KonanConfig(
        targets=_as_str_list(konan_data.get("targets")),
        artifacts={
            name: _as_path_mapping(targets, f"konan.artifacts.{name}")
            for name, targets in _as_dict(konan_data.get("artifacts")).items()
        },
    )

    native_data = _as_dict(data.get("native"))
    components = {
        name: _as_path_mapping(_as_dict(component).get("targets"), f"native.components.{name}")
        for name, component in _as_dict(native_data.get("components")).items()
    }

    android_data = _as_dict(data.get("android"))

    ktlint_section = data.get("ktlint")
    if ktlint_section is not None and not isinstance(ktlint_section, dict):
        raise ConfigError(f"{descriptor_file}: 'ktlint' must be a mapping")

    return ProjectDescriptor(
        name=_as_str(data.get("name")) or directory.name,
        directory=directory,
        plugins=_as_str_list(data.get("plugins")),
        build_dir=_as_str(data.get("build_dir")) or "build",
        source_sets=_as_path_mapping(data.get("source_sets"), "source_sets"),
        android_variants=_as_path_mapping(android_data.get("variants"), "android.variants"),
        konan=konan,
        native_components=components,
        include=_as_str_list(data.get("include")),
        ktlint=dict(ktlint_section or {}),
    )


def settings_from_mapping(
    data: Dict[str, Any],
    *,
    base: KtlintSettings | None = None,
    root: Path | None = None,
) -> KtlintSettings:
    """Overlay a raw ``ktlint:`` section onto ``base`` settings."""
    settings = base or KtlintSettings()
    if not data:
        return settings

    changes: Dict[str, Any] = {}

    version = _as_str(data.get("version"))
    if version is not None:
        changes["version"] = version

    for key in ("verbose", "debug", "android", "ignore_failures", "output_to_console"):
        if key in data:
            value = _as_bool(data.get(key))
            if value is None:
                raise ConfigError(f"ktlint.{key} must be a boolean, got {data.get(key)!r}")
            changes[key] = value

    if "rule_sets" in data:
        changes["rule_sets"] = tuple(_as_str_list(data.get("rule_sets")))

    if "reporters" in data:
        changes["reporters"] = tuple(
            ReporterType.from_name(name) for name in _as_str_list(data.get("reporters"))
        )

    base_dir = root or Path.cwd()
    editorconfig = _as_str(data.get("additional_editorconfig_file"))
    if editorconfig:
        changes["additional_editorconfig_file"] = (base_dir / editorconfig).resolve()

    executable = _as_str(data.get("executable"))
    if executable:
        changes["executable"] = executable

    if "classpath" in data:
        changes["classpath"] = tuple(
            (base_dir / entry).resolve() for entry in _as_str_list(data.get("classpath"))
        )

    java = _as_str(data.get("java"))
    if java:
        changes["java"] = java

    return replace(settings, **changes)


def _read_descriptor(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    return loaded or {}


def _as_path_mapping(value: Any, label: str) -> Dict[str, List[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{label}' must map names to lists of paths")
    return {str(name): _as_str_list(paths) for name, paths in value.items()}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "ConfigError",
    "DEFAULT_KTLINT_VERSION",
    "DESCRIPTOR_FILE_NAME",
    "KonanConfig",
    "KtlintSettings",
    "ProjectDescriptor",
    "load_descriptor",
    "settings_from_mapping",
]
