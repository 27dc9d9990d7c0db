"""Exceptions raised while configuring or running ktgate builds."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when the build cannot be configured."""


class TaskExistsError(ConfigError):
    """Raised when a task name is registered twice in one project."""

    def __init__(self, project: str, name: str) -> None:
        super().__init__(f"Cannot add task '{name}' to project '{project}': a task with that name already exists.")
        self.project = project
        self.name = name


class TaskExecutionError(RuntimeError):
    """Raised when a task action fails during execution."""

    def __init__(self, task_path: str, message: str) -> None:
        super().__init__(f"Execution failed for task '{task_path}': {message}")
        self.task_path = task_path


__all__ = ["ConfigError", "TaskExecutionError", "TaskExistsError"]
