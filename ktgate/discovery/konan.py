"""Kotlin/Native units from the legacy ``konan`` plugin."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .base import SourceDiscoverer
from ..models import SourceUnit
from ..project import Project


class KonanArtifactDiscoverer(SourceDiscoverer):
    """One unit per build artifact, over the declared targets it compiles for."""

    kind = "konan"
    plugin_ids = frozenset({"konan"})

    def discover(self, project: Project) -> Iterable[SourceUnit]:
        konan = project.konan
        if konan is None:
            return
        for artifact in konan.artifacts:
            roots: List[Path] = []
            for target in konan.targets:
                sources = artifact.find_by_target(target)
                if sources is not None:
                    roots.extend(sources)
            yield SourceUnit(name=artifact.name, source_roots=tuple(roots), kind=self.kind)
