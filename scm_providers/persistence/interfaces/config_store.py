"""Configuration store protocol consumed by SCM providers.

Providers depend only on this abstraction; concrete implementations live in
``persistence.memory`` and ``persistence.sqlite``.

Semantics:
- ``get_config`` returns the named group, or ``None`` when absent. Callers
  receive a copy and must not expect mutations to be persisted.
- ``save_configs`` replaces each named group wholesale. Groups not mentioned
  in the call are left untouched.
- Implementations raise backend-specific exceptions only for genuine I/O or
  integrity failures; providers wrap them into the error taxonomy.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable

from ...base.models import ConfigGroup


@runtime_checkable
class ConfigStore(Protocol):
    """Key-value store of ``ConfigGroup`` documents keyed by group name."""

    def get_config(self, name: str) -> Optional[ConfigGroup]:
        """Return the group named ``name`` or ``None``."""
        ...

    def save_configs(self, groups: Iterable[ConfigGroup]) -> None:
        """Persist ``groups``, replacing any stored group with the same name."""
        ...


__all__ = ["ConfigStore"]
