"""Creates and wires the per-unit ktlint check and format tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from .args import InvocationArgsBuilder
from .config import KtlintSettings
from .constants import CHECK_LIFECYCLE_TASK_NAME, REPORTS_DIR
from .discovery import SourceDiscoverer, applicable_discoverers
from .editorconfig import resolve_editorconfig_files
from .logging import get_logger
from .models import SourceUnit
from .project import Project
from .registry import AggregationRegistry
from .reporters import ReporterType, enabled_reporters
from .runner import LinterRunner
from .stores import TaskCache
from .tasks import KtlintCheckTask, KtlintFormatTask
from .version import SemVer, check_minimal_supported_version

_LOGGER = get_logger("graph")


def report_path(project: Project, unit_name: str, reporter: ReporterType) -> Path:
    return project.build_dir / REPORTS_DIR / f"ktlint-{unit_name}.{reporter.file_extension}"


def check_task_name(unit: SourceUnit) -> str:
    return f"ktlint{unit.task_suffix}Check"


def format_task_name(unit: SourceUnit) -> str:
    return f"ktlint{unit.task_suffix}Format"


class TaskGraphBuilder:
    """Registers ktlint tasks for every compilation unit of a project.

    Each unit gets one check and one format task. Check tasks feed the
    project's ``ktlintCheck``, the root ``ktlintCheck`` and the lifecycle
    ``check`` task; format tasks only feed the ``ktlintFormat`` aggregations.
    """

    def __init__(
        self,
        registry: AggregationRegistry,
        *,
        discoverers: Sequence[SourceDiscoverer] | None = None,
        runner_factory: Callable[[KtlintSettings], LinterRunner] = LinterRunner,
        cache: TaskCache | None = None,
    ) -> None:
        self.registry = registry
        self._discoverers = discoverers
        self._runner_factory = runner_factory
        self._cache = cache

    def apply(self, project: Project) -> List[SourceUnit]:
        """Discover the project's units and register their tasks."""
        settings = project.settings
        version = check_minimal_supported_version(settings.version)

        editorconfig_files = resolve_editorconfig_files(
            project.directory,
            project.root_project.directory,
            settings.additional_editorconfig_file,
        )
        _LOGGER.debug("%s uses %d editorconfig file(s)", project.path, len(editorconfig_files))

        runner = self._runner_factory(settings)
        args_builder = InvocationArgsBuilder(settings)

        registered: List[SourceUnit] = []
        for discoverer in applicable_discoverers(project, self._discoverers):
            discoverer.materialize(project)
            for unit in discoverer.discover(project):
                if unit.is_empty and discoverer.skip_empty:
                    _LOGGER.debug("Skipping %s unit '%s' without sources", discoverer.kind, unit.name)
                    continue
                self.add_unit(
                    project,
                    unit,
                    args_builder=args_builder,
                    editorconfig_files=editorconfig_files,
                    runner=runner,
                    version=version,
                )
                registered.append(unit)
        return registered

    def add_unit(
        self,
        project: Project,
        unit: SourceUnit,
        *,
        args_builder: InvocationArgsBuilder,
        editorconfig_files: Tuple[Path, ...],
        runner: LinterRunner,
        version: SemVer,
    ) -> Tuple[KtlintCheckTask, KtlintFormatTask]:
        settings = project.settings
        args = args_builder.build(unit)

        reports: Dict[ReporterType, Path] = {
            reporter: report_path(project, unit.name, reporter)
            for reporter in enabled_reporters(version, settings.reporters)
        }
        check_task = KtlintCheckTask(
            check_task_name(unit),
            project,
            unit=unit,
            args=args,
            editorconfig_files=editorconfig_files,
            runner=runner,
            reports=reports,
            ignore_failures=settings.ignore_failures,
            output_to_console=settings.output_to_console,
            cache=self._cache,
        )
        project.tasks.register(check_task)
        self.registry.check_task(project).depends_on(check_task)
        if not project.is_root:
            self.registry.check_task(project.root_project).depends_on(check_task)
        lifecycle = project.tasks.find_by_name(CHECK_LIFECYCLE_TASK_NAME)
        if lifecycle is not None:
            lifecycle.depends_on(check_task)

        format_task = KtlintFormatTask(
            format_task_name(unit),
            project,
            unit=unit,
            args=args,
            editorconfig_files=editorconfig_files,
            runner=runner,
        )
        project.tasks.register(format_task)
        self.registry.format_task(project).depends_on(format_task)
        if not project.is_root:
            self.registry.format_task(project.root_project).depends_on(format_task)

        return check_task, format_task


__all__ = ["TaskGraphBuilder", "check_task_name", "format_task_name", "report_path"]
