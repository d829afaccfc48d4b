"""ConfigGroup DTO (single-class module).

A ``ConfigGroup`` is the unit persisted to and retrieved from the external
configuration store (e.g. ``github_config``).
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .parameter_spec import ParameterSpec

MASK = "********"


class ConfigGroup(BaseModel):
    """Named, titled collection of :class:`ParameterSpec` fields."""

    model_config = ConfigDict(extra="allow")

    name: str
    title: Optional[str] = None
    description: Optional[str] = None
    params: List[ParameterSpec] = Field(default_factory=list)

    def get(self, key: str) -> Optional[ParameterSpec]:
        """Return the first parameter whose key equals ``key``."""
        for param in self.params:
            if param.key == key:
                return param
        return None

    def value_of(self, key: str, default: Any = "") -> Any:
        """Return the extracted (trimmed) first value for ``key``."""
        from ..params import get_param

        return get_param(self.params, key, default)

    def violations(self, check_required: bool = True) -> List[str]:
        """Collect validation failures from every parameter in the group."""
        problems: List[str] = []
        for param in self.params:
            problems.extend(param.violations(check_required=check_required))
        return problems

    def masked(self, secret_keys: Iterable[str] = ()) -> "ConfigGroup":
        """Return a deep copy whose secret values are replaced by a mask.

        A parameter is secret when its own ``attr.secret`` is set or its key
        is listed in ``secret_keys``.
        """
        secret = set(secret_keys)
        clone = self.model_copy(deep=True)
        for param in clone.params:
            if (param.attr.secret or param.key in secret) and param.value:
                param.value = [MASK for _ in param.value]
        return clone


__all__ = ["ConfigGroup", "MASK"]
