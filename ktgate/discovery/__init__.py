"""Compilation-unit discoverers for the supported Kotlin plugin topologies."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Set

from .android import ANDROID_PLUGIN_IDS, AndroidVariantDiscoverer
from .base import SourceDiscoverer
from .konan import KonanArtifactDiscoverer
from .kotlin import KotlinSourceSetDiscoverer
from .native import NativeComponentDiscoverer
from ..project import Project

_BUILTIN_FACTORIES: Dict[str, Callable[[], SourceDiscoverer]] = {
    "kotlin": KotlinSourceSetDiscoverer,
    "android": AndroidVariantDiscoverer,
    "konan": KonanArtifactDiscoverer,
    "native": NativeComponentDiscoverer,
}


def discover_discoverers(enabled: Sequence[str] | None = None) -> List[SourceDiscoverer]:
    """Return instantiated discoverers, honoring optional enabled kinds."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}
        unknown = enabled_set.difference(_BUILTIN_FACTORIES)
        if unknown:
            missing = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown discoverers requested: {missing}")

    return [
        factory()
        for name, factory in _BUILTIN_FACTORIES.items()
        if enabled_set is None or name in enabled_set
    ]


def applicable_discoverers(
    project: Project,
    discoverers: Sequence[SourceDiscoverer] | None = None,
) -> List[SourceDiscoverer]:
    """Discoverers whose plugins are applied to ``project``."""
    candidates = discoverers if discoverers is not None else discover_discoverers()
    return [discoverer for discoverer in candidates if discoverer.supports(project)]


__all__ = [
    "ANDROID_PLUGIN_IDS",
    "AndroidVariantDiscoverer",
    "KonanArtifactDiscoverer",
    "KotlinSourceSetDiscoverer",
    "NativeComponentDiscoverer",
    "SourceDiscoverer",
    "applicable_discoverers",
    "discover_discoverers",
]
