"""Helper utilities for constructing temporary ktgate builds in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Mapping

import yaml

from ktgate.config import DESCRIPTOR_FILE_NAME


class ProjectBuilder:
    """Utility for writing descriptors and sources into a throwaway build."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "build-root"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the build root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def descriptor(self, data: Mapping[str, Any], directory: str = ".") -> Path:
        """Write a ktgate.yml for the project in ``directory``."""
        target = (self.root / directory / DESCRIPTOR_FILE_NAME).resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(yaml.safe_dump(dict(data), sort_keys=False), encoding="utf-8")
        return target

    def path(self, relative: str = ".") -> Path:
        return (self.root / relative).resolve()


__all__ = ["ProjectBuilder"]
