"""End-to-end tests for BuildSession over ktgate.yml descriptors."""

from __future__ import annotations

import pytest

from ktgate.errors import ConfigError, TaskExecutionError
from ktgate.runner import LinterRunner
from ktgate.session import BuildSession
from ktgate.tasks import KtlintCheckTask, KtlintFormatTask
from tests._fixtures.fake_process import FakeProcessRunner
from tests._fixtures.project_builder import ProjectBuilder


def _multi_project(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".editorconfig": "root = true\n\n[*]\ncharset = utf-8\n",
            "app/src/main/kotlin/App.kt": "class App\n",
            "app/.editorconfig": "[*.kt]\nindent_size = 4\n",
            "lib/src/main/kotlin/Lib.kt": "class Lib\n",
            "lib/src/test/kotlin/LibTest.kt": "class LibTest\n",
        }
    )
    project_builder.descriptor(
        {"name": "demo", "include": ["app", "lib"], "ktlint": {"executable": "ktlint"}}
    )
    project_builder.descriptor(
        {
            "plugins": ["kotlin-android", "com.android.application"],
            "android": {
                "variants": {
                    "debug": ["src/main/kotlin"],
                    "release": [],
                }
            },
        },
        directory="app",
    )
    project_builder.descriptor(
        {
            "plugins": ["kotlin"],
            "source_sets": {"main": ["src/main/kotlin"], "test": ["src/test/kotlin"]},
        },
        directory="lib",
    )


def test_configure_wires_every_project(project_builder: ProjectBuilder, runner_factory) -> None:
    _multi_project(project_builder)
    session = BuildSession(project_builder.path(), runner_factory=runner_factory)

    root = session.configure()

    app, lib = root.children
    assert [task.name for task in app.tasks if isinstance(task, (KtlintCheckTask, KtlintFormatTask))] == [
        "ktlintDebugCheck",
        "ktlintDebugFormat",
    ]
    root_check = root.tasks.find_by_name("ktlintCheck")
    assert [task.path for task in root_check.dependencies] == [
        ":app:ktlintDebugCheck",
        ":lib:ktlintMainCheck",
        ":lib:ktlintTestCheck",
    ]
    root_format = root.tasks.find_by_name("ktlintFormat")
    assert len(root_format.dependencies) == 3

    app_check = app.tasks.find_by_name("ktlintDebugCheck")
    assert app_check.editorconfig_files == (
        project_builder.path("app/.editorconfig"),
        project_builder.path(".editorconfig"),
    )
    assert "ktlintApplyToIdea" in root.tasks
    assert "addKtlintCheckGitPreCommitHook" in root.tasks
    assert "ktlintApplyToIdea" not in lib.tasks


def test_configure_is_idempotent(project_builder: ProjectBuilder, runner_factory) -> None:
    _multi_project(project_builder)
    session = BuildSession(project_builder.path(), runner_factory=runner_factory)

    assert session.configure() is session.configure()


def test_run_by_name_executes_matching_tasks_everywhere(
    project_builder: ProjectBuilder, runner_factory, fake_process: FakeProcessRunner
) -> None:
    _multi_project(project_builder)
    session = BuildSession(project_builder.path(), runner_factory=runner_factory, use_cache=False)

    report = session.run(["ktlintCheck"])

    assert report.task_paths == [
        ":app:ktlintDebugCheck",
        ":lib:ktlintMainCheck",
        ":lib:ktlintTestCheck",
        ":ktlintCheck",
        ":app:ktlintCheck",
        ":lib:ktlintCheck",
    ]
    assert len(fake_process.calls) == 3


def test_check_lifecycle_never_formats(
    project_builder: ProjectBuilder, runner_factory, fake_process: FakeProcessRunner
) -> None:
    _multi_project(project_builder)
    session = BuildSession(project_builder.path(), runner_factory=runner_factory, use_cache=False)

    session.run([":lib:check"])

    assert len(fake_process.calls) == 2
    assert all("-F" not in call for call in fake_process.calls)


def test_run_persists_task_cache(
    project_builder: ProjectBuilder, runner_factory, fake_process: FakeProcessRunner
) -> None:
    _multi_project(project_builder)
    BuildSession(project_builder.path(), runner_factory=runner_factory).run([":lib:ktlintMainCheck"])

    assert project_builder.path("build/ktgate/task-cache.json").exists()


def test_unknown_task_fails(project_builder: ProjectBuilder, runner_factory) -> None:
    _multi_project(project_builder)
    session = BuildSession(project_builder.path(), runner_factory=runner_factory)

    with pytest.raises(ConfigError):
        session.run(["ktlintNope"])


def test_unsupported_version_fails_configuration(project_builder: ProjectBuilder, runner_factory) -> None:
    project_builder.descriptor(
        {"plugins": ["kotlin"], "source_sets": {"main": ["src"]}, "ktlint": {"version": "0.33.9"}}
    )

    with pytest.raises(ConfigError) as excinfo:
        BuildSession(project_builder.path(), runner_factory=runner_factory).configure()
    assert "Detected KtLint version: 0.33.9" in str(excinfo.value)


def test_lint_failure_propagates(project_builder: ProjectBuilder) -> None:
    _multi_project(project_builder)
    failing = FakeProcessRunner(returncode=1, stdout="Lib.kt:1:1: Needless blank line(s)\n")
    session = BuildSession(
        project_builder.path(),
        runner_factory=lambda settings: LinterRunner(settings, runner=failing),
        use_cache=False,
    )

    with pytest.raises(TaskExecutionError):
        session.run([":lib:ktlintMainCheck"])
