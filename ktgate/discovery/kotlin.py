"""Plain Kotlin source sets (kotlin, kotlin2js, kotlin-platform-common)."""

from __future__ import annotations

from typing import Iterable

from .base import SourceDiscoverer
from ..models import SourceUnit
from ..project import Project


class KotlinSourceSetDiscoverer(SourceDiscoverer):
    """One unit per declared source set, even when it has no directories."""

    kind = "kotlin"
    plugin_ids = frozenset({"kotlin", "kotlin2js", "kotlin-platform-common"})
    skip_empty = False

    def discover(self, project: Project) -> Iterable[SourceUnit]:
        for name, roots in project.source_sets.items():
            yield SourceUnit(name=name, source_roots=roots, kind=self.kind)
