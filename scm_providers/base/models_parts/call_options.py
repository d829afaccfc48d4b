"""CallOptions DTO: the argument bundle passed into an action.

``configs.params`` is the only input channel for per-call arguments.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from .parameter_spec import ParameterSpec


class CallConfigs(BaseModel):
    """Container holding the per-call parameter list."""

    model_config = ConfigDict(extra="allow")

    params: List[ParameterSpec] = Field(default_factory=list)


class CallOptions(BaseModel):
    """Per-call options wrapping ``configs.params``."""

    model_config = ConfigDict(extra="allow")

    configs: CallConfigs = Field(default_factory=CallConfigs)

    @property
    def params(self) -> List[ParameterSpec]:
        return self.configs.params

    @classmethod
    def coerce(cls, options: Any) -> "CallOptions":
        """Build ``CallOptions`` from ``None``, a mapping or an instance.

        A ``configs`` value that is not a mapping (for example the list of
        config groups carried by a configuration update) yields an empty
        parameter list rather than a validation error.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, dict):
            configs = options.get("configs")
            if not isinstance(configs, (dict, CallConfigs)):
                return cls()
        return cls.model_validate(options)


__all__ = ["CallOptions", "CallConfigs"]
