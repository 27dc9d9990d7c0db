"""Fake ``subprocess.run`` used to observe ktlint invocations."""

from __future__ import annotations

import subprocess
from typing import List


class FakeProcessRunner:
    """Stands in for ``subprocess.run`` and records every ktlint command."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: List[List[str]] = []

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        return subprocess.CompletedProcess(command, self.returncode, self.stdout, self.stderr)


__all__ = ["FakeProcessRunner"]
