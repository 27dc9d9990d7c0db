"""Report formats understood by ktlint and the versions that introduced them."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple

from .errors import ConfigError
from .version import SemVer


class ReporterType(Enum):
    PLAIN = ("plain", (), "0.9.0", "txt")
    PLAIN_GROUP_BY_FILE = ("plain", ("group_by_file",), "0.9.0", "group_by_file.txt")
    CHECKSTYLE = ("checkstyle", (), "0.9.0", "xml")
    JSON = ("json", (), "0.9.0", "json")
    HTML = ("html", (), "0.36.0", "html")

    def __init__(
        self,
        reporter_name: str,
        options: Tuple[str, ...],
        available_since: str,
        file_extension: str,
    ) -> None:
        self.reporter_name = reporter_name
        self.options = options
        self.available_since_version = SemVer.parse(available_since)
        self.file_extension = file_extension

    def is_available(self, version: SemVer | str) -> bool:
        """Return True when ``version`` of ktlint ships this reporter."""
        if isinstance(version, str):
            version = SemVer.parse(version)
        return version >= self.available_since_version

    def cli_argument(self, output: str) -> str:
        parts = [self.reporter_name, *self.options, f"output={output}"]
        return "--reporter=" + ",".join(parts)

    @classmethod
    def from_name(cls, value: str) -> "ReporterType":
        key = value.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            known = ", ".join(member.name.lower() for member in cls)
            raise ConfigError(f"Unknown reporter '{value}'. Known reporters: {known}") from None


def enabled_reporters(version: SemVer | str, configured: Iterable[ReporterType]) -> list[ReporterType]:
    """Configured reporters the given ktlint version supports, in declaration order."""
    wanted = set(configured)
    return [reporter for reporter in ReporterType if reporter in wanted and reporter.is_available(version)]


__all__ = ["ReporterType", "enabled_reporters"]
