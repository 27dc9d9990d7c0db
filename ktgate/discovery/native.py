"""Kotlin/Native components from the ``org.jetbrains.kotlin.native`` plugin."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .base import SourceDiscoverer
from ..models import SourceUnit
from ..project import Project


class NativeComponentDiscoverer(SourceDiscoverer):
    kind = "native"
    plugin_ids = frozenset({"org.jetbrains.kotlin.native"})

    def discover(self, project: Project) -> Iterable[SourceUnit]:
        for component in project.native_components:
            roots: List[Path] = []
            for target in component.konan_targets:
                roots.extend(component.all_sources(target))
            yield SourceUnit(name=component.name, source_roots=tuple(roots), kind=self.kind)
