"""Persistent up-to-date cache for check task executions."""

from __future__ import annotations

import hashlib
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

_CACHE_VERSION = 1


def fingerprint_inputs(args: Sequence[str], files: Iterable[Path]) -> str:
    """Hash the argument list and the path plus contents of every input file."""
    digest = hashlib.sha256()
    for arg in args:
        digest.update(arg.encode("utf-8"))
        digest.update(b"\0")
    for path in sorted({Path(item) for item in files}):
        digest.update(path.as_posix().encode("utf-8"))
        digest.update(b"\0")
        try:
            with path.open("rb") as handle:
                for chunk in iter(lambda: handle.read(1024 * 1024), b""):
                    digest.update(chunk)
        except OSError:
            digest.update(b"<missing>")
        digest.update(b"\0")
    return digest.hexdigest()


class TaskCache:
    """Stores the input fingerprint of the last successful run of each task."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, task_path: str) -> Optional[str]:
        entry = self._entries.get(task_path)
        if not entry:
            return None
        fingerprint = entry.get("fingerprint")
        return fingerprint if isinstance(fingerprint, str) else None

    def is_up_to_date(self, task_path: str, fingerprint: str) -> bool:
        return self.get(task_path) == fingerprint

    def store(self, task_path: str, fingerprint: str) -> None:
        self._entries[task_path] = {
            "fingerprint": fingerprint,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def invalidate(self, task_path: str) -> None:
        if self._entries.pop(task_path, None) is not None:
            self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {"version": _CACHE_VERSION, "entries": self._entries}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError:
            return
        self._dirty = False

    def _load(self, path: Path) -> None:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, ValueError):
            return

        if not isinstance(payload, dict) or payload.get("version") != _CACHE_VERSION:
            return
        entries = payload.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: value
            for key, value in entries.items()
            if isinstance(key, str) and isinstance(value, dict)
        }


__all__ = ["TaskCache", "fingerprint_inputs"]
