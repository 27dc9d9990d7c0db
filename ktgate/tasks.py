"""Task types that run ktlint."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

from .constants import (
    CHECK_TASK_DESCRIPTION,
    FORMAT_TASK_DESCRIPTION,
    FORMATTING_GROUP,
    HELP_GROUP,
    KOTLIN_EXTENSIONS,
    VERIFICATION_GROUP,
)
from .errors import TaskExecutionError
from .logging import get_logger, log_ktlint_debug
from .models import InvocationArgs, SourceUnit
from .project import Project, Task
from .reporters import ReporterType
from .runner import LinterResult, LinterRunner
from .stores import TaskCache, fingerprint_inputs

_LOGGER = get_logger("tasks")


class KtlintTask(Task, ABC):
    """Shared plumbing for tasks that run ktlint over a unit's sources."""

    def __init__(
        self,
        name: str,
        project: Project,
        *,
        unit: SourceUnit,
        args: InvocationArgs,
        editorconfig_files: Sequence[Path],
        runner: LinterRunner,
        group: str,
        description: str,
    ) -> None:
        super().__init__(name, project, group=group, description=description)
        self.unit = unit
        self.args = args
        self.editorconfig_files: Tuple[Path, ...] = tuple(editorconfig_files)
        self.runner = runner

    @property
    def source_roots(self) -> Tuple[Path, ...]:
        return self.unit.source_roots

    def source_files(self) -> List[Path]:
        """Kotlin files under the unit's source roots; missing roots contribute nothing."""
        return sorted(set(_iter_kotlin_files(self.source_roots)))

    @abstractmethod
    def command_args(self) -> List[str]:
        """Arguments passed to ktlint for this task."""

    def _invoke(self) -> LinterResult:
        args = self.command_args()
        log_ktlint_debug(
            _LOGGER,
            self.project.settings.debug,
            lambda: [
                f"{self.path} command: {' '.join(self.runner.command(args))}",
                f"{self.path} editorconfig files: {', '.join(str(p) for p in self.editorconfig_files) or '(none)'}",
            ],
        )
        return self.runner.run(args, cwd=self.project.directory)


class KtlintCheckTask(KtlintTask):
    """Checks a unit's sources and writes one report per enabled reporter."""

    def __init__(
        self,
        name: str,
        project: Project,
        *,
        unit: SourceUnit,
        args: InvocationArgs,
        editorconfig_files: Sequence[Path],
        runner: LinterRunner,
        reports: Dict[ReporterType, Path],
        ignore_failures: bool = False,
        output_to_console: bool = True,
        cache: TaskCache | None = None,
    ) -> None:
        super().__init__(
            name,
            project,
            unit=unit,
            args=args,
            editorconfig_files=editorconfig_files,
            runner=runner,
            group=VERIFICATION_GROUP,
            description=CHECK_TASK_DESCRIPTION,
        )
        self.reports = dict(reports)
        self.ignore_failures = ignore_failures
        self.output_to_console = output_to_console
        self.cache = cache
        self.up_to_date = False

    def command_args(self) -> List[str]:
        args = self.args.for_check()
        for reporter, output in self.reports.items():
            args.append(reporter.cli_argument(output.as_posix()))
        return args

    def fingerprint(self) -> str:
        inputs = [*self.source_files(), *self.editorconfig_files]
        return fingerprint_inputs(self.command_args(), inputs)

    def execute(self) -> None:
        fingerprint = self.fingerprint() if self.cache is not None else None
        if (
            fingerprint is not None
            and self.cache is not None
            and self.cache.is_up_to_date(self.path, fingerprint)
            and all(path.exists() for path in self.reports.values())
        ):
            self.up_to_date = True
            _LOGGER.info("%s UP-TO-DATE", self.path)
            return

        for output in self.reports.values():
            output.parent.mkdir(parents=True, exist_ok=True)

        result = self._invoke()
        if self.output_to_console and result.stdout.strip():
            for line in result.stdout.splitlines():
                _LOGGER.info("%s", line)

        if not result.succeeded:
            if self.cache is not None:
                self.cache.invalidate(self.path)
            if not self.ignore_failures:
                raise TaskExecutionError(self.path, result.short_message())
            _LOGGER.warning("%s found violations (ignored): %s", self.path, result.short_message())
            return

        if self.cache is not None and fingerprint is not None:
            self.cache.store(self.path, fingerprint)


class KtlintFormatTask(KtlintTask):
    """Rewrites a unit's sources in place with ``ktlint -F``."""

    def __init__(
        self,
        name: str,
        project: Project,
        *,
        unit: SourceUnit,
        args: InvocationArgs,
        editorconfig_files: Sequence[Path],
        runner: LinterRunner,
    ) -> None:
        super().__init__(
            name,
            project,
            unit=unit,
            args=args,
            editorconfig_files=editorconfig_files,
            runner=runner,
            group=FORMATTING_GROUP,
            description=FORMAT_TASK_DESCRIPTION,
        )

    def command_args(self) -> List[str]:
        return self.args.for_format()

    def execute(self) -> None:
        result = self._invoke()
        if not result.succeeded:
            raise TaskExecutionError(self.path, result.short_message())


class ApplyToIdeaTask(Task):
    """Generates IntelliJ IDEA code style files with ktlint."""

    def __init__(self, name: str, project: Project, *, runner: LinterRunner, globally: bool) -> None:
        scope = "globally" if globally else "for this project"
        super().__init__(
            name,
            project,
            group=HELP_GROUP,
            description=f"Generates IDEA built-in formatter rules and applies them {scope}.",
        )
        self.runner = runner
        self.globally = globally

    def command_args(self) -> List[str]:
        args = ["--apply-to-idea" if self.globally else "--apply-to-idea-project", "-y"]
        if self.project.settings.android:
            args.append("--android")
        return args

    def execute(self) -> None:
        result = self.runner.run(self.command_args(), cwd=self.project.directory)
        if not result.succeeded:
            raise TaskExecutionError(self.path, result.short_message())


def _iter_kotlin_files(roots: Sequence[Path]) -> Iterator[Path]:
    suffixes = {f".{extension}" for extension in KOTLIN_EXTENSIONS}
    for root in roots:
        try:
            if root.is_file():
                yield root
            elif root.is_dir():
                for path in root.rglob("*"):
                    if path.suffix in suffixes and path.is_file():
                        yield path
        except OSError:
            continue


__all__ = ["ApplyToIdeaTask", "KtlintCheckTask", "KtlintFormatTask", "KtlintTask"]
