"""Command line interface: ``ktgate tasks`` and ``ktgate run``."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .errors import ConfigError, TaskExecutionError
from .executor import ExecutionReport
from .logging import configure_logging
from .project import Project
from .session import BuildSession

_VERBOSE_HELP = "Log debug output, including each ktlint command line."


def _verbose_parent() -> argparse.ArgumentParser:
    # SUPPRESS keeps a subcommand from resetting a -v given before it.
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help=_VERBOSE_HELP)
    return parent


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ktgate",
        description="Wire ktlint check and format tasks into a multi-project Kotlin build.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help=_VERBOSE_HELP)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    common = [_verbose_parent()]

    tasks_parser = subparsers.add_parser(
        "tasks",
        parents=common,
        help="List the tasks registered for every project.",
    )
    tasks_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Build root containing the root ktgate.yml (defaults to current directory).",
    )
    tasks_parser.add_argument(
        "--all",
        dest="show_dependencies",
        action="store_true",
        help="Also list task dependencies.",
    )

    run_parser = subparsers.add_parser(
        "run",
        parents=common,
        help="Execute tasks and their dependencies.",
    )
    run_parser.add_argument(
        "tasks",
        nargs="+",
        help="Task names (run in every project) or absolute task paths such as :lib:ktlintMainCheck.",
    )
    run_parser.add_argument(
        "--path",
        default=".",
        help="Build root containing the root ktgate.yml (defaults to current directory).",
    )
    run_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Ignore up-to-date results from previous runs.",
    )
    return parser


def _print_tasks(root: Project, *, show_dependencies: bool) -> None:
    for project in root.all_projects():
        location = os.path.relpath(project.directory, root.directory)
        print(f"Project {project.path} ({location})")
        for task in project.tasks:
            group = f"[{task.group}] " if task.group else ""
            description = f" - {task.description}" if task.description else ""
            print(f"  {group}{task.name}{description}")
            if show_dependencies:
                for dependency in task.dependencies:
                    print(f"      -> {dependency.path}")


def _summary(report: ExecutionReport) -> str:
    summary = f"BUILD SUCCESSFUL: {len(report.executed)} task(s) executed"
    if report.up_to_date:
        summary += f", {len(report.up_to_date)} up-to-date"
    return summary


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ktgate commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        if args.command == "tasks":
            root = BuildSession(args.path).configure()
            _print_tasks(root, show_dependencies=args.show_dependencies)
        else:
            session = BuildSession(args.path, use_cache=not args.no_cache)
            print(_summary(session.run(args.tasks)))
    except ConfigError as exc:
        parser.exit(1, f"ktgate: {exc}\n")
    except TaskExecutionError as exc:
        parser.exit(1, f"ktgate: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
