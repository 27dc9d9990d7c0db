"""Locate the ``.editorconfig`` files that apply to a project directory.

A file stops the upward search only when it has a ``root = true`` line
terminated by a newline, with nothing after ``true``. A final ``root = true``
line without a trailing newline, or one with trailing spaces or a comment, is
not a root declaration, so the search continues into parent directories.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple

EDITOR_CONFIG_FILE_NAME = ".editorconfig"

# Requires a line terminator right after ``true``: trailing spaces, inline
# comments or an unterminated last line do not count as a root declaration.
_ROOT_DECLARATION = re.compile(r"^root\s?=\s?true(?:\r\n|[\n\r\v\f\x85\u2028\u2029])")


def is_root_editorconfig(path: Path) -> bool:
    """Return True when ``path`` declares itself the top of the editorconfig hierarchy."""
    try:
        with path.open("r", encoding="utf-8", errors="replace", newline="") as handle:
            for line in handle:
                if _ROOT_DECLARATION.match(line):
                    return True
    except OSError:
        return False
    return False


def resolve_editorconfig_files(
    project_dir: Path,
    root_dir: Path,
    additional: Path | None = None,
) -> Tuple[Path, ...]:
    """Collect editorconfig files from ``project_dir`` upwards, closest first.

    The walk stops at the first file declaring ``root = true``, at ``root_dir``
    or at the filesystem root, whichever comes first. ``additional`` is always
    appended.
    """
    found: List[Path] = []
    current = Path(project_dir)
    boundary = Path(root_dir)

    while True:
        candidate = current / EDITOR_CONFIG_FILE_NAME
        if _is_file(candidate):
            found.append(candidate)
            if is_root_editorconfig(candidate):
                break
        parent = current.parent
        if current == boundary or parent == current:
            break
        current = parent

    if additional is not None:
        found.append(Path(additional))

    return tuple(found)


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


__all__ = ["EDITOR_CONFIG_FILE_NAME", "is_root_editorconfig", "resolve_editorconfig_files"]
