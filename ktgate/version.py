"""Semantic version parsing for ktlint compatibility gates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from .errors import ConfigError

_SEMVER = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


@total_ordering
@dataclass(frozen=True)
class SemVer:
    """Version ordered by major, minor and patch; a pre-release sorts first."""

    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, value: str) -> "SemVer":
        match = _SEMVER.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise ConfigError(f"Invalid KtLint version: {value!r} is not a semantic version.")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            pre_release=match.group("pre"),
            build=match.group("build"),
        )

    def _key(self) -> tuple[int, int, int, int, str]:
        # Releases outrank pre-releases of the same core version.
        if self.pre_release is None:
            return (self.major, self.minor, self.patch, 1, "")
        return (self.major, self.minor, self.patch, 0, self.pre_release)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            text += f"-{self.pre_release}"
        if self.build:
            text += f"+{self.build}"
        return text


MINIMAL_SUPPORTED_VERSION = SemVer(0, 34, 0)


def check_minimal_supported_version(version: str) -> SemVer:
    """Parse ``version`` and fail configuration when it predates 0.34.0."""
    parsed = SemVer.parse(version)
    if parsed < MINIMAL_SUPPORTED_VERSION:
        raise ConfigError(
            f"KtLint versions less than {MINIMAL_SUPPORTED_VERSION} are not supported. "
            f"Detected KtLint version: {version}."
        )
    return parsed


__all__ = ["MINIMAL_SUPPORTED_VERSION", "SemVer", "check_minimal_supported_version"]
