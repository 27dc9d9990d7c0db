"""ktlint task wiring for multi-project Kotlin builds."""

from .config import KtlintSettings
from .editorconfig import resolve_editorconfig_files
from .errors import ConfigError, TaskExecutionError, TaskExistsError
from .models import InvocationArgs, SourceUnit
from .session import BuildSession

__all__ = [
    "BuildSession",
    "ConfigError",
    "InvocationArgs",
    "KtlintSettings",
    "SourceUnit",
    "TaskExecutionError",
    "TaskExistsError",
    "resolve_editorconfig_files",
]
