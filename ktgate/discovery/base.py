"""Base class for compilation-unit discoverers."""

from abc import ABC, abstractmethod
from typing import ClassVar, FrozenSet, Iterable

from ..models import SourceUnit
from ..project import Project


class SourceDiscoverer(ABC):
    """Contract for discoverers that enumerate a project's compilation units.

    ``materialize`` must run before ``discover``; topologies whose host data is
    computed lazily populate it there.
    """

    kind: ClassVar[str]
    plugin_ids: ClassVar[FrozenSet[str]]
    skip_empty: ClassVar[bool] = True

    def supports(self, project: Project) -> bool:
        """Return True when one of this topology's plugins is applied to the project."""
        return any(project.has_plugin(plugin_id) for plugin_id in self.plugin_ids)

    def materialize(self, project: Project) -> None:
        """Force host metadata to be computed before enumeration."""

    @abstractmethod
    def discover(self, project: Project) -> Iterable[SourceUnit]:
        """Yield the project's compilation units."""
