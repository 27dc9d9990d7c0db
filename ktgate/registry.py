"""Per-session registry of the ktlintCheck/ktlintFormat aggregation tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .constants import (
    CHECK_PARENT_DESCRIPTION,
    CHECK_PARENT_TASK_NAME,
    FORMAT_PARENT_DESCRIPTION,
    FORMAT_PARENT_TASK_NAME,
    FORMATTING_GROUP,
    VERIFICATION_GROUP,
)
from .project import Project, Task


@dataclass
class AggregationTasks:
    check: Optional[Task] = None
    format: Optional[Task] = None


class AggregationRegistry:
    """Maps each project to its aggregation tasks, creating them on first request.

    One registry is created per build session and handed to every unit
    registration, so each project ends up with exactly one check and one
    format aggregation task.
    """

    def __init__(self) -> None:
        self._entries: Dict[Project, AggregationTasks] = {}

    def check_task(self, project: Project) -> Task:
        entry = self._entry(project)
        if entry.check is None:
            entry.check = self._get_or_create(
                project, CHECK_PARENT_TASK_NAME, VERIFICATION_GROUP, CHECK_PARENT_DESCRIPTION
            )
        return entry.check

    def format_task(self, project: Project) -> Task:
        entry = self._entry(project)
        if entry.format is None:
            entry.format = self._get_or_create(
                project, FORMAT_PARENT_TASK_NAME, FORMATTING_GROUP, FORMAT_PARENT_DESCRIPTION
            )
        return entry.format

    def __contains__(self, project: object) -> bool:
        return isinstance(project, Project) and project in self._entries

    def _entry(self, project: Project) -> AggregationTasks:
        return self._entries.setdefault(project, AggregationTasks())

    @staticmethod
    def _get_or_create(project: Project, name: str, group: str, description: str) -> Task:
        existing = project.tasks.find_by_name(name)
        if existing is not None:
            return existing
        return project.tasks.register(Task(name, project, group=group, description=description))


__all__ = ["AggregationRegistry", "AggregationTasks"]
