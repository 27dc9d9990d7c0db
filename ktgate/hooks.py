"""Git pre-commit hook installation tasks."""

from __future__ import annotations

import shlex
import stat
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .constants import (
    CHECK_PARENT_TASK_NAME,
    FORMAT_PARENT_TASK_NAME,
    HELP_GROUP,
)
from .errors import TaskExecutionError
from .logging import get_logger
from .project import Project, Task

_LOGGER = get_logger("hooks")

HOOK_START_MARKER = "######## KTGATE HOOK START ########"
HOOK_END_MARKER = "######## KTGATE HOOK END ########"
SHEBANG = "#!/bin/sh"
_TEMPLATE_NAME = "pre-commit.sh.j2"


def _create_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).with_name("templates"))),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
    )


def render_hook_section(root_dir: Path, *, format_sources: bool) -> str:
    """Render the ktgate section of the pre-commit hook."""
    task = FORMAT_PARENT_TASK_NAME if format_sources else CHECK_PARENT_TASK_NAME
    command = f"ktgate run {task} --path {shlex.quote(str(root_dir))}"
    template = _create_env().get_template(_TEMPLATE_NAME)
    return template.render(
        start_marker=HOOK_START_MARKER,
        end_marker=HOOK_END_MARKER,
        command=command,
        restage=format_sources,
    )


def merge_hook(existing: str | None, section: str) -> str:
    """Insert or replace the ktgate section, keeping any other hook content."""
    if not existing or not existing.strip():
        return f"{SHEBANG}\n\n{section}"

    start = existing.find(HOOK_START_MARKER)
    end = existing.find(HOOK_END_MARKER)
    if start != -1 and end != -1 and end > start:
        tail = existing[end + len(HOOK_END_MARKER):]
        if tail.startswith("\n"):
            tail = tail[1:]
        return existing[:start] + section + tail

    return existing.rstrip("\n") + "\n\n" + section


class GitHookTask(Task):
    """Installs a git pre-commit hook that runs the ktlint aggregation when Kotlin files are staged."""

    def __init__(self, name: str, project: Project, *, format_sources: bool) -> None:
        if format_sources:
            description = (
                f"Adds a git pre-commit hook that runs {FORMAT_PARENT_TASK_NAME} over the whole build "
                "when Kotlin files are staged, then re-stages them."
            )
        else:
            description = (
                f"Adds a git pre-commit hook that runs {CHECK_PARENT_TASK_NAME} over the whole build "
                "when Kotlin files are staged."
            )
        super().__init__(
            name,
            project,
            group=HELP_GROUP,
            description=description,
        )
        self.format_sources = format_sources

    @property
    def hook_path(self) -> Path:
        return self.project.root_project.directory / ".git" / "hooks" / "pre-commit"

    def execute(self) -> None:
        git_dir = self.project.root_project.directory / ".git"
        if not git_dir.is_dir():
            raise TaskExecutionError(self.path, f"{self.project.root_project.directory} is not a git repository")

        hook = self.hook_path
        existing = hook.read_text(encoding="utf-8") if hook.exists() else None
        section = render_hook_section(self.project.root_project.directory, format_sources=self.format_sources)

        hook.parent.mkdir(parents=True, exist_ok=True)
        hook.write_text(merge_hook(existing, section), encoding="utf-8")
        hook.chmod(hook.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        _LOGGER.info("Installed ktlint pre-commit hook at %s", hook)


__all__ = [
    "GitHookTask",
    "HOOK_END_MARKER",
    "HOOK_START_MARKER",
    "merge_hook",
    "render_hook_section",
]
