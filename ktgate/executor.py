"""Runs tasks after their dependencies, each at most once."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Set

from .errors import ConfigError
from .logging import get_logger
from .project import Task

_LOGGER = get_logger("executor")


@dataclass
class ExecutionReport:
    """Tasks executed by one run, in execution order."""

    executed: List[Task] = field(default_factory=list)
    up_to_date: List[Task] = field(default_factory=list)

    @property
    def task_paths(self) -> List[str]:
        return [task.path for task in self.executed]


def execution_order(requested: Iterable[Task]) -> List[Task]:
    """Dependency-first ordering of ``requested`` and everything they depend on."""
    ordered: List[Task] = []
    done: Set[int] = set()
    visiting: Set[int] = set()

    def _visit(task: Task, trail: List[str]) -> None:
        key = id(task)
        if key in done:
            return
        if key in visiting:
            cycle = " -> ".join([*trail, task.path])
            raise ConfigError(f"Circular dependency between tasks: {cycle}")
        visiting.add(key)
        for dependency in task.dependencies:
            _visit(dependency, [*trail, task.path])
        visiting.discard(key)
        done.add(key)
        ordered.append(task)

    for task in requested:
        _visit(task, [])
    return ordered


class TaskExecutor:
    """Executes tasks sequentially; the first failure stops the run."""

    def execute(self, requested: Iterable[Task]) -> ExecutionReport:
        report = ExecutionReport()
        for task in execution_order(requested):
            _LOGGER.debug("> Task %s", task.path)
            task.execute()
            report.executed.append(task)
            if getattr(task, "up_to_date", False):
                report.up_to_date.append(task)
        return report


__all__ = ["ExecutionReport", "TaskExecutor", "execution_order"]
