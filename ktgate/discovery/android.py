"""Android build variants of projects using kotlin-android."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List

from .base import SourceDiscoverer
from ..models import SourceUnit
from ..project import Project

ANDROID_PLUGIN_IDS: FrozenSet[str] = frozenset(
    {
        "com.android.application",
        "com.android.library",
        "com.android.instantapp",
        "com.android.feature",
        "com.android.test",
    }
)


class AndroidVariantDiscoverer(SourceDiscoverer):
    """One unit per variant, named after the full variant name."""

    kind = "android"
    plugin_ids = frozenset({"kotlin-android"})

    def supports(self, project: Project) -> bool:
        return super().supports(project) and any(
            project.has_plugin(plugin_id) for plugin_id in ANDROID_PLUGIN_IDS
        )

    def materialize(self, project: Project) -> None:
        # Variant data stays empty until the project has been evaluated.
        if project.variant_manager is not None:
            project.variant_manager.populate_variant_data_list()

    def discover(self, project: Project) -> Iterable[SourceUnit]:
        manager = project.variant_manager
        if manager is None:
            return []
        units: List[SourceUnit] = []
        for scope in manager.variant_scopes:
            units.append(
                SourceUnit(
                    name=scope.full_variant_name,
                    source_roots=scope.java_sources,
                    kind=self.kind,
                )
            )
        return units
