"""Invokes the external ktlint process."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

from .config import KtlintSettings
from .constants import KTLINT_MAIN_CLASS

DEFAULT_EXECUTABLE = "ktlint"


@dataclass
class LinterResult:
    """Outcome of one ktlint invocation."""

    command: List[str]
    exit_code: int | None
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def short_message(self) -> str:
        if self.exit_code is None:
            return self.stderr.strip() or "ktlint could not be started"
        output = self.stderr.strip() or self.stdout.strip()
        first_line = output.splitlines()[0] if output else ""
        return f"ktlint exited with code {self.exit_code}" + (f": {first_line}" if first_line else "")


ProcessRunner = Callable[..., "subprocess.CompletedProcess[str]"]


class LinterRunner:
    """Builds the ktlint command line and runs it in a subprocess.

    A configured classpath runs ktlint's main class on the JVM; otherwise the
    configured executable (``ktlint`` by default) is looked up on ``PATH``.
    """

    def __init__(self, settings: KtlintSettings, runner: ProcessRunner | None = None) -> None:
        self.settings = settings
        self._runner = runner or subprocess.run

    def command(self, args: Sequence[str]) -> List[str]:
        if self.settings.classpath and not self.settings.executable:
            classpath = os.pathsep.join(str(entry) for entry in self.settings.classpath)
            return [self.settings.java, "-cp", classpath, KTLINT_MAIN_CLASS, *args]
        return [self.settings.executable or DEFAULT_EXECUTABLE, *args]

    def run(self, args: Sequence[str], *, cwd: Path) -> LinterResult:
        command = self.command(args)
        if self._runner is subprocess.run and shutil.which(command[0]) is None:
            return LinterResult(
                command=command,
                exit_code=None,
                stdout="",
                stderr=f"Executable not available: {command[0]}",
            )

        process = self._runner(  # noqa: S603  # command is built from ktlint settings
            command,
            cwd=cwd,
            check=False,
            capture_output=True,
            text=True,
        )
        return LinterResult(
            command=command,
            exit_code=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
        )


__all__ = ["DEFAULT_EXECUTABLE", "LinterResult", "LinterRunner"]
