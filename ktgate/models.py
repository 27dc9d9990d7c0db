"""Core data models shared across ktgate components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Tuple

from .errors import ConfigError

_SAFE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_unit_name(name: str) -> str:
    """Return ``name`` when it is safe for task names and report file names."""
    if not isinstance(name, str) or not _SAFE_NAME.match(name) or name in {".", ".."}:
        raise ConfigError(f"Invalid compilation unit name: {name!r}")
    return name


def ordered_unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class SourceUnit:
    """One compilation unit: a source set, a build variant or a native target."""

    name: str
    source_roots: Tuple[Path, ...]
    kind: str = "kotlin"

    def __post_init__(self) -> None:
        validate_unit_name(self.name)
        roots = tuple(dict.fromkeys(Path(root) for root in self.source_roots))
        object.__setattr__(self, "source_roots", roots)

    @property
    def is_empty(self) -> bool:
        return not self.source_roots

    @property
    def task_suffix(self) -> str:
        """Unit name with its first letter upper-cased, used inside task names."""
        return self.name[:1].upper() + self.name[1:]


@dataclass(frozen=True)
class InvocationArgs:
    """Ordered, de-duplicated command-line arguments for one ktlint invocation."""

    args: Tuple[str, ...] = field(default_factory=tuple)

    FORMAT_FLAG = "-F"

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", ordered_unique(self.args))

    def for_check(self) -> list[str]:
        return list(self.args)

    def for_format(self) -> list[str]:
        return [self.FORMAT_FLAG, *self.args]

    def __iter__(self):
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)
