"""Persistent stores used by ktgate."""

from .task_cache import TaskCache, fingerprint_inputs

__all__ = ["TaskCache", "fingerprint_inputs"]
