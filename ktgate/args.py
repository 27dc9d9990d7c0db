"""Builds ktlint command-line arguments for a compilation unit."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from .config import KtlintSettings
from .constants import KOTLIN_EXTENSIONS
from .models import InvocationArgs, SourceUnit


def source_globs(
    source_roots: Iterable[Path],
    extensions: Sequence[str] = KOTLIN_EXTENSIONS,
) -> List[str]:
    """Return ``<root>/**/*.<ext>`` for every root and Kotlin extension."""
    return [
        f"{Path(root).as_posix()}/**/*.{extension}"
        for root in source_roots
        for extension in extensions
    ]


def additional_run_args(settings: KtlintSettings) -> List[str]:
    args: List[str] = []
    if settings.verbose:
        args.append("--verbose")
    if settings.debug:
        args.append("--debug")
    if settings.android:
        args.append("--android")
    args.extend(f"--ruleset={rule_set}" for rule_set in settings.rule_sets)
    return args


class InvocationArgsBuilder:
    """Turns a unit's source roots and the ktlint settings into invocation args."""

    def __init__(self, settings: KtlintSettings, extensions: Sequence[str] = KOTLIN_EXTENSIONS) -> None:
        self.settings = settings
        self.extensions = tuple(extensions)

    def build(self, unit: SourceUnit) -> InvocationArgs:
        args = source_globs(unit.source_roots, self.extensions)
        args.extend(additional_run_args(self.settings))
        return InvocationArgs(tuple(args))


__all__ = ["InvocationArgsBuilder", "additional_run_args", "source_globs"]
