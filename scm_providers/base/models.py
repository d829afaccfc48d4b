"""
Provider-agnostic DTOs for the SCM providers layer.

Re-exports the single-class modules under ``models_parts`` so upstream code
imports from one stable location.
"""

from __future__ import annotations

from .models_parts import (
    MASK,
    CallConfigs,
    CallOptions,
    ConfigGroup,
    ParameterAttr,
    ParameterOption,
    ParameterSpec,
    ProviderState,
    ProviderStatus,
    RegexPattern,
)

__all__ = [
    "ParameterSpec",
    "ParameterAttr",
    "ParameterOption",
    "RegexPattern",
    "ConfigGroup",
    "MASK",
    "CallConfigs",
    "CallOptions",
    "ProviderState",
    "ProviderStatus",
]
