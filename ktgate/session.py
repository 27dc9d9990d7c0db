"""Build session orchestration: configure the task graph, then run tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import KtlintSettings
from .constants import (
    APPLY_TO_IDEA_GLOBALLY_TASK_NAME,
    APPLY_TO_IDEA_TASK_NAME,
    INSTALL_GIT_HOOK_CHECK_TASK,
    INSTALL_GIT_HOOK_FORMAT_TASK,
    INTERMEDIATES_DIR,
)
from .discovery import SourceDiscoverer
from .errors import ConfigError
from .executor import ExecutionReport, TaskExecutor
from .graph import TaskGraphBuilder
from .hooks import GitHookTask
from .logging import get_logger
from .project import Project, Task, load_project_tree
from .registry import AggregationRegistry
from .runner import LinterRunner
from .stores import TaskCache
from .tasks import ApplyToIdeaTask

TASK_CACHE_FILE = "task-cache.json"


class BuildSession:
    """Configures a build rooted at ``root_dir`` and executes its tasks."""

    def __init__(
        self,
        root_dir: Path | str,
        *,
        runner_factory: Callable[[KtlintSettings], LinterRunner] = LinterRunner,
        discoverers: Sequence[SourceDiscoverer] | None = None,
        use_cache: bool = True,
        executor: TaskExecutor | None = None,
    ) -> None:
        self.root_dir = Path(root_dir).expanduser().resolve()
        self._runner_factory = runner_factory
        self._discoverers = discoverers
        self._use_cache = use_cache
        self.executor = executor or TaskExecutor()
        self.logger = get_logger("session")
        self.registry = AggregationRegistry()
        self.cache: Optional[TaskCache] = None
        self._root: Optional[Project] = None

    @property
    def root(self) -> Project:
        if self._root is None:
            raise RuntimeError("Build session has not been configured")
        return self._root

    def configure(self) -> Project:
        """Load the project tree and register every ktlint task."""
        if self._root is not None:
            return self._root

        root = load_project_tree(self.root_dir)
        if self._use_cache:
            self.cache = TaskCache(root.build_dir / INTERMEDIATES_DIR / TASK_CACHE_FILE)

        builder = TaskGraphBuilder(
            self.registry,
            discoverers=self._discoverers,
            runner_factory=self._runner_factory,
            cache=self.cache,
        )
        for project in root.all_projects():
            units = builder.apply(project)
            self.logger.debug("Registered ktlint tasks for %d unit(s) in %s", len(units), project.path)

        self._register_root_tasks(root)
        self._root = root
        return root

    def resolve_tasks(self, names: Sequence[str]) -> List[Task]:
        """Select tasks by absolute path, or by name across every project."""
        root = self.configure()
        selected: List[Task] = []
        for name in names:
            if name.startswith(":"):
                task = root.find_task(name)
                matches = [task] if task is not None else []
            else:
                matches = []
                for project in root.all_projects():
                    task = project.tasks.find_by_name(name)
                    if task is not None:
                        matches.append(task)
            if not matches:
                raise ConfigError(f"Task '{name}' not found in build {self.root_dir}")
            for task in matches:
                if not any(task is existing for existing in selected):
                    selected.append(task)
        return selected

    def run(self, names: Sequence[str]) -> ExecutionReport:
        tasks = self.resolve_tasks(names)
        self.logger.info("Running %s", ", ".join(task.path for task in tasks))
        try:
            return self.executor.execute(tasks)
        finally:
            if self.cache is not None:
                self.cache.persist()

    def _register_root_tasks(self, root: Project) -> None:
        runner = self._runner_factory(root.settings)
        root.tasks.register(ApplyToIdeaTask(APPLY_TO_IDEA_TASK_NAME, root, runner=runner, globally=False))
        root.tasks.register(
            ApplyToIdeaTask(APPLY_TO_IDEA_GLOBALLY_TASK_NAME, root, runner=runner, globally=True)
        )
        root.tasks.register(GitHookTask(INSTALL_GIT_HOOK_CHECK_TASK, root, format_sources=False))
        root.tasks.register(GitHookTask(INSTALL_GIT_HOOK_FORMAT_TASK, root, format_sources=True))


__all__ = ["BuildSession", "TASK_CACHE_FILE"]
