"""In-process model of the host build: projects, tasks and plugin topologies."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import (
    DESCRIPTOR_FILE_NAME,
    KtlintSettings,
    ProjectDescriptor,
    load_descriptor,
    settings_from_mapping,
)
from .constants import CHECK_LIFECYCLE_TASK_NAME, VERIFICATION_GROUP
from .errors import ConfigError, TaskExistsError
from .logging import get_logger

_LOGGER = get_logger("project")


class Task:
    """A named unit of work; the base class does nothing when executed."""

    def __init__(
        self,
        name: str,
        project: "Project",
        *,
        group: str | None = None,
        description: str | None = None,
    ) -> None:
        self.name = name
        self.project = project
        self.group = group
        self.description = description
        self._dependencies: List[Task] = []

    @property
    def path(self) -> str:
        prefix = self.project.path
        return f"{prefix}{self.name}" if prefix == ":" else f"{prefix}:{self.name}"

    @property
    def dependencies(self) -> Tuple["Task", ...]:
        return tuple(self._dependencies)

    def depends_on(self, *tasks: "Task") -> "Task":
        for task in tasks:
            if not any(existing is task for existing in self._dependencies):
                self._dependencies.append(task)
        return self

    def execute(self) -> None:
        """Run the task action. Lifecycle and aggregation tasks have none."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class TaskContainer:
    """Tasks of one project, keyed by name, in registration order."""

    def __init__(self, project: "Project") -> None:
        self._project = project
        self._tasks: Dict[str, Task] = {}

    def register(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise TaskExistsError(self._project.path, task.name)
        self._tasks[task.name] = task
        return task

    def find_by_name(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __len__(self) -> int:
        return len(self._tasks)


class VariantDataNotPopulatedError(RuntimeError):
    """Raised when variant scopes are read before the variant data was populated."""


@dataclass(frozen=True)
class VariantScope:
    full_variant_name: str
    java_sources: Tuple[Path, ...]


class VariantManager:
    """Android-style variant registry whose data must be populated before use."""

    def __init__(self, declared: Dict[str, Sequence[Path]]) -> None:
        self._declared = {name: tuple(paths) for name, paths in declared.items()}
        self._scopes: Optional[List[VariantScope]] = None

    @property
    def populated(self) -> bool:
        return self._scopes is not None

    def populate_variant_data_list(self) -> None:
        if self._scopes is not None:
            return
        self._scopes = [
            VariantScope(full_variant_name=name, java_sources=paths)
            for name, paths in self._declared.items()
        ]

    @property
    def variant_scopes(self) -> List[VariantScope]:
        if self._scopes is None:
            raise VariantDataNotPopulatedError(
                "Variant data is empty until populate_variant_data_list() is called"
            )
        return list(self._scopes)


@dataclass
class KonanArtifact:
    """A konan build artifact and the source files of its per-target compile tasks."""

    name: str
    compile_sources: Dict[str, Tuple[Path, ...]] = field(default_factory=dict)

    def find_by_target(self, target: str) -> Optional[Tuple[Path, ...]]:
        return self.compile_sources.get(target)


@dataclass
class KonanModel:
    targets: List[str] = field(default_factory=list)
    artifacts: List[KonanArtifact] = field(default_factory=list)


@dataclass
class NativeComponent:
    """A Kotlin/Native component with sources declared per konan target."""

    name: str
    sources: Dict[str, Tuple[Path, ...]] = field(default_factory=dict)

    @property
    def konan_targets(self) -> List[str]:
        return list(self.sources)

    def all_sources(self, target: str) -> Tuple[Path, ...]:
        return self.sources.get(target, ())


class Project:
    """A project in the build, holding its tasks and Kotlin plugin topology."""

    def __init__(
        self,
        name: str,
        directory: Path,
        *,
        parent: "Project | None" = None,
        build_dir: Path | None = None,
        plugins: Iterable[str] = (),
        settings: KtlintSettings | None = None,
    ) -> None:
        self.name = name
        self.directory = Path(directory)
        self.parent = parent
        self.build_dir = Path(build_dir) if build_dir is not None else self.directory / "build"
        self.plugins: List[str] = list(dict.fromkeys(plugins))
        self.settings = settings or KtlintSettings()
        self.children: List[Project] = []
        self.tasks = TaskContainer(self)
        self.source_sets: Dict[str, Tuple[Path, ...]] = {}
        self.variant_manager: Optional[VariantManager] = None
        self.konan: Optional[KonanModel] = None
        self.native_components: List[NativeComponent] = []

        if parent is not None:
            parent.children.append(self)

        self.tasks.register(
            Task(
                CHECK_LIFECYCLE_TASK_NAME,
                self,
                group=VERIFICATION_GROUP,
                description="Runs all checks.",
            )
        )

    @property
    def root_project(self) -> "Project":
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def path(self) -> str:
        if self.parent is None:
            return ":"
        parent_path = self.parent.path
        return f"{parent_path}{self.name}" if parent_path == ":" else f"{parent_path}:{self.name}"

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self.plugins

    def file(self, value: str | Path) -> Path:
        """Resolve ``value`` relative to the project directory."""
        path = Path(value)
        if not path.is_absolute():
            path = self.directory / path
        return path

    def files(self, values: Iterable[str | Path]) -> Tuple[Path, ...]:
        return tuple(self.file(value) for value in values)

    def all_projects(self) -> Iterator["Project"]:
        yield self
        for child in self.children:
            yield from child.all_projects()

    def find_task(self, path: str) -> Optional[Task]:
        """Look up a task by absolute path (``:lib:ktlintCheck``) or by name in this project."""
        if not path.startswith(":"):
            return self.tasks.find_by_name(path)
        project_path, _, task_name = path.rpartition(":")
        project_path = project_path or ":"
        for project in self.root_project.all_projects():
            if project.path == project_path:
                return project.tasks.find_by_name(task_name)
        return None

    def __repr__(self) -> str:
        return f"Project({self.path!r})"


def load_project_tree(root_dir: Path) -> Project:
    """Build the project tree from ``ktgate.yml`` descriptors under ``root_dir``."""
    root_dir = Path(root_dir).expanduser().resolve()
    if not root_dir.is_dir():
        raise ConfigError(f"Build root is not a directory: {root_dir}")

    root_descriptor = load_descriptor(root_dir)
    root_settings = settings_from_mapping(root_descriptor.ktlint, root=root_dir)
    root = _project_from_descriptor(root_descriptor, parent=None, settings=root_settings)

    seen: Dict[str, str] = {}
    for include in root_descriptor.include:
        child_dir = (root_dir / include).resolve()
        if not child_dir.is_dir():
            raise ConfigError(f"Included project directory not found: {include}")
        descriptor = load_descriptor(child_dir)
        if descriptor.name in seen:
            raise ConfigError(
                f"Included projects '{seen[descriptor.name]}' and '{include}' are both named "
                f"'{descriptor.name}'; set a unique 'name' in one of their {DESCRIPTOR_FILE_NAME} files"
            )
        seen[descriptor.name] = include
        settings = settings_from_mapping(descriptor.ktlint, base=root_settings, root=child_dir)
        _project_from_descriptor(descriptor, parent=root, settings=settings)

    _LOGGER.debug("Loaded %d projects from %s", sum(1 for _ in root.all_projects()), root_dir)
    return root


def _project_from_descriptor(
    descriptor: ProjectDescriptor,
    *,
    parent: Project | None,
    settings: KtlintSettings,
) -> Project:
    project = Project(
        descriptor.name,
        descriptor.directory,
        parent=parent,
        build_dir=descriptor.directory / descriptor.build_dir,
        plugins=descriptor.plugins,
        settings=settings,
    )
    project.source_sets = {
        name: project.files(paths) for name, paths in descriptor.source_sets.items()
    }
    if descriptor.android_variants:
        project.variant_manager = VariantManager(
            {name: project.files(paths) for name, paths in descriptor.android_variants.items()}
        )
    if descriptor.konan.targets or descriptor.konan.artifacts:
        project.konan = KonanModel(
            targets=list(descriptor.konan.targets),
            artifacts=[
                KonanArtifact(
                    name=name,
                    compile_sources={
                        target: project.files(paths) for target, paths in targets.items()
                    },
                )
                for name, targets in descriptor.konan.artifacts.items()
            ],
        )
    project.native_components = [
        NativeComponent(
            name=name,
            sources={target: project.files(paths) for target, paths in targets.items()},
        )
        for name, targets in descriptor.native_components.items()
    ]
    return project


__all__ = [
    "KonanArtifact",
    "KonanModel",
    "NativeComponent",
    "Project",
    "Task",
    "TaskContainer",
    "VariantDataNotPopulatedError",
    "VariantManager",
    "VariantScope",
    "load_project_tree",
]
